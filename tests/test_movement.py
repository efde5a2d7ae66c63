"""Tests for moving points and move rules."""

import pytest

from mazedig.core import Bounds, Maze, Position, Vector
from mazedig.core.movement import BoundsRule, DugRule, MovingPoint, UndugRule


class TestMovingPoint:
    """Tests for the rule-free moving point."""

    def test_defaults(self):
        """Test that a bare point sits at the origin and may always move."""
        point = MovingPoint()
        assert point.position == Position(0, 0)
        assert point.vector == Vector(0, 0)
        assert point.can_move() is True

    def test_next_position_is_idempotent(self):
        """Test that next_position() never moves the point."""
        point = MovingPoint(Position(3, 4), Vector(1, 0))
        for _ in range(5):
            assert point.next_position() == Position(4, 4)
        assert point.position == Position(3, 4)

    def test_advance(self):
        """Test advancing by the current and by an explicit vector."""
        point = MovingPoint(Position(3, 4), Vector(1, 0))
        assert point.advance() == Position(4, 4)
        assert point.advance(Vector(0, -2)) == Position(4, 2)
        assert point.vector == Vector(1, 0)

    def test_move_respects_rules(self):
        """Test that move() only advances when every rule passes."""
        point = MovingPoint(Position(0, 0), Vector(1, 0), rules=(BoundsRule(Bounds(right=2)),))
        assert point.move() is True
        assert point.move() is False
        assert point.position == Position(1, 0)

    def test_probe_restores_vector(self):
        """Test that probing another direction leaves the vector unchanged."""
        point = MovingPoint(Position(0, 0), Vector(1, 0))
        with point.probe(Vector(0, 1)):
            assert point.next_position() == Position(0, 1)
        assert point.vector == Vector(1, 0)

        with pytest.raises(RuntimeError):
            with point.probe(Vector(-1, 0)):
                raise RuntimeError("boom")
        assert point.vector == Vector(1, 0)

    def test_rules_checked_in_order(self):
        """Test that a failing rule short-circuits the rules after it."""
        calls = []

        def reject(current, next_position):
            calls.append("reject")
            return False

        def accept(current, next_position):
            calls.append("accept")
            return True

        point = MovingPoint(Position(0, 0), Vector(1, 0), rules=(accept, reject, accept))
        assert point.can_move() is False
        assert calls == ["accept", "reject"]

    def test_legal_directions(self):
        """Test listing the directions that pass every rule."""
        point = MovingPoint(Position(0, 0), Vector(0, 1), rules=(BoundsRule(Bounds()),))
        directions = (Vector(0, -1), Vector(1, 0), Vector(0, 1), Vector(-1, 0))
        assert point.legal_directions(directions) == [Vector(1, 0), Vector(0, 1)]
        assert point.vector == Vector(0, 1)


class TestBoundsRule:
    """Tests for bounds checking."""

    def test_default_bounds(self):
        """Test the default 100x100 rectangle."""
        assert Bounds() == Bounds(top=0, right=100, bottom=100, left=0)

    @pytest.mark.parametrize(
        "position,allowed",
        [
            (Position(2, 2), True),   # top-left corner is inclusive
            (Position(9, 9), True),
            (Position(10, 5), False),  # right is exclusive
            (Position(5, 10), False),  # bottom is exclusive
            (Position(1, 5), False),
            (Position(5, 1), False),
        ],
    )
    def test_edges(self, position, allowed):
        """Test inclusive top/left and exclusive right/bottom edges."""
        rule = BoundsRule(Bounds(top=2, right=10, bottom=10, left=2))
        assert rule(Position(5, 5), position) is allowed


class TestOccupancyRules:
    """Tests for the dug / undug grid rules."""

    def test_undug_rule(self):
        """Test that only undug cells inside the grid are legal for digging."""
        maze = Maze(4, 4, exit=Position(2, 0))
        rule = UndugRule(maze)
        here = Position(2, 2)
        assert rule(here, Position(2, 0)) is False
        assert rule(here, Position(0, 2)) is True
        assert rule(here, Position(4, 2)) is False
        assert rule(here, Position(2, -2)) is False

    def test_dug_rule(self):
        """Test that only corridor cells are legal for running."""
        maze = Maze(4, 4, exit=Position(2, 0))
        rule = DugRule(maze)
        here = Position(2, 1)
        assert rule(here, Position(2, 0)) is True
        assert rule(here, Position(2, 2)) is False
        assert rule(here, Position(2, -1)) is False


class TestVector:
    """Tests for direction vectors."""

    def test_vector_helpers(self):
        """Test reversing, halving and serializing a dig vector."""
        vector = Vector(2, 0)
        assert vector.reversed() == Vector(-2, 0)
        assert vector.halved() == Vector(1, 0)
        assert vector.to_dict() == {"x": 2, "y": 0}
