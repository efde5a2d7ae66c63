"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from mazedig.services.simulation_service import SimulationService, get_simulation_service

# Type aliases for cleaner route signatures
Simulation = Annotated[SimulationService, Depends(get_simulation_service)]
