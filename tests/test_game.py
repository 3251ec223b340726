"""Tests for game sessions."""

from untangle import EventType, Game, GameConfig, GameLevel, Graph


def create_crossed_square():
    """A 4-cycle with crossing diameters, solved by moving vertex 1 to (10, -250)."""
    graph = Graph()
    for x, y in [(300.0, 0.0), (-300.0, 0.0), (0.0, -300.0), (0.0, 300.0)]:
        graph.add_vertex(x, y)
    for a, b in [(0, 1), (1, 2), (2, 3), (3, 0)]:
        graph.connect(a, b)
    return GameLevel(graph)


def solve_crossed_square(level):
    level.start_drag(level.vertices[1])
    level.drag_to((10.0, -250.0))
    level.finish_drag()


class TestNewGame:
    """Tests for starting games."""

    def test_first_level_size(self):
        """Level 1 has between 6 and 8 vertices."""
        for seed in range(10):
            game = Game.new(random_seed=seed)
            assert game.level_number == 1
            assert 6 <= game.level.vertex_count <= 8
            assert game.level.intersection_count > 0

    def test_start_level_number(self):
        """Games can start at any level number."""
        game = Game.new(3, random_seed=0)
        assert game.level_number == 3
        assert 10 <= game.level.vertex_count <= 12

    def test_custom_config(self):
        """Level sizing follows the config."""
        config = GameConfig(base_min_vertex_count=10, base_max_vertex_count=10, vertices_per_level=0)
        game = Game.new(5, config=config, random_seed=1)
        assert game.level.vertex_count == 10

    def test_reproducible(self):
        """Same seed, same first level."""
        first = Game.new(random_seed=5)
        second = Game.new(random_seed=5)
        assert first.level.graph.edges() == second.level.graph.edges()
        assert first.level.graph.positions() == second.level.graph.positions()

    def test_existing_level(self):
        """A given level is used as-is."""
        level = create_crossed_square()
        game = Game(level, 7)
        assert game.level is level
        assert game.level_number == 7


class TestLevelProgression:
    """Tests for advancing through levels."""

    def test_solving_advances(self):
        """Solving a level bumps the number and generates a bigger level."""
        level = create_crossed_square()
        game = Game(level, 1, random_seed=3)

        solve_crossed_square(level)

        assert game.level_number == 2
        assert game.level is not level
        assert 8 <= game.level.vertex_count <= 10
        assert game.level.intersection_count > 0

    def test_old_level_detached(self):
        """The session stops listening to replaced levels."""
        level = create_crossed_square()
        game = Game(level, 1, random_seed=3)
        assert level.listener_count(EventType.solved) == 1

        solve_crossed_square(level)

        assert level.listener_count(EventType.solved) == 0
        assert game.level.listener_count(EventType.solved) == 1

    def test_change_events(self):
        """Level number and level changes are reported in order."""
        level = create_crossed_square()
        game = Game(level, 4, random_seed=3)
        events = []
        game.on("changed", events.append)

        solve_crossed_square(level)

        assert [e["property"] for e in events] == ["level_number", "level"]
        assert events[0]["value"] == 5
        assert events[1]["value"] is game.level

    def test_level_setter(self):
        """Assigning a level moves the solved listener."""
        first = create_crossed_square()
        second = create_crossed_square()
        game = Game(first, 1)

        game.level = second

        assert first.listener_count("solved") == 0
        assert second.listener_count("solved") == 1

        solve_crossed_square(first)
        assert game.level_number == 1
