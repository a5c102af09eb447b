"""Tests for the terrain cost model, TerrainProblem, config and problem checks."""

import numpy as np
import pytest

from terrain_lab.config import GRASS_COST, MUD_COST, TerrainConfig
from terrain_lab.core.location import Location
from terrain_lab.problems.checks import reachable_locations, sanity_check_problem
from terrain_lab.problems.terrain import (
    InvalidLocationError, TerrainMap, TerrainProblem, generate_cost_map, make_terrain_problem,
)


class TestGenerateCostMap:

    def test_shape_and_values(self):
        costs = generate_cost_map(7, 4, Location(0, 0), Location(6, 3), 0.5, seed=1)
        assert costs.shape == (4, 7)
        assert set(np.unique(costs)) <= {GRASS_COST, MUD_COST}

    def test_same_seed_same_map(self):
        a = generate_cost_map(10, 10, Location(0, 0), Location(9, 9), 0.3, seed=42)
        b = generate_cost_map(10, 10, Location(0, 0), Location(9, 9), 0.3, seed=42)
        assert np.array_equal(a, b)

    def test_different_seeds_differ(self):
        a = generate_cost_map(12, 12, Location(0, 0), Location(11, 11), 0.5, seed=1)
        b = generate_cost_map(12, 12, Location(0, 0), Location(11, 11), 0.5, seed=2)
        assert not np.array_equal(a, b)

    def test_start_and_goal_always_grass(self):
        costs = generate_cost_map(4, 3, Location(1, 1), Location(3, 2), 1.0, seed=0)
        assert costs[1, 1] == GRASS_COST
        assert costs[2, 3] == GRASS_COST
        assert (costs == MUD_COST).sum() == 4 * 3 - 2

    def test_zero_probability_is_all_grass(self):
        costs = generate_cost_map(5, 5, Location(0, 0), Location(4, 4), 0.0, seed=3)
        assert (costs == GRASS_COST).all()

    @pytest.mark.parametrize("prob", [-0.1, 1.5])
    def test_bad_probability(self, prob):
        with pytest.raises(ValueError, match="mud_probability"):
            generate_cost_map(3, 3, Location(0, 0), Location(2, 2), prob)

    def test_bad_size(self):
        with pytest.raises(ValueError):
            generate_cost_map(0, 3, Location(0, 0), Location(0, 0), 0.2)


class TestTerrainMap:

    def test_from_rows(self):
        terrain = TerrainMap.from_rows([".~#", "..."])
        assert terrain.width == 3
        assert terrain.height == 2
        assert terrain.is_mud(Location(1, 0))
        assert not terrain.is_mud(Location(0, 0))
        assert not terrain.passable(Location(2, 0))
        assert terrain.cost(Location(1, 0)) == MUD_COST
        assert list(terrain.rows()) == [".~#", "..."]

    def test_from_rows_rejects_unknown_symbol(self):
        with pytest.raises(ValueError, match="Unknown terrain symbol"):
            TerrainMap.from_rows([".x"])

    def test_from_rows_rejects_ragged(self):
        with pytest.raises(ValueError):
            TerrainMap.from_rows(["..", "."])

    def test_bounds(self):
        terrain = TerrainMap.uniform(3, 2)
        assert terrain.in_bounds(Location(2, 1))
        assert not terrain.in_bounds(Location(3, 0))
        assert not terrain.in_bounds(Location(0, -1))
        assert not terrain.is_mud(Location(9, 9))

    def test_costs_are_frozen(self):
        source = np.ones((2, 2))
        terrain = TerrainMap(source)
        source[0, 0] = MUD_COST
        assert terrain.cost(Location(0, 0)) == GRASS_COST
        with pytest.raises(ValueError):
            terrain.costs[0, 0] = MUD_COST

    def test_rejects_negative_costs(self):
        with pytest.raises(ValueError):
            TerrainMap([[1.0, -1.0]])


class TestTerrainProblem:

    @pytest.fixture
    def problem(self):
        terrain = TerrainMap.from_rows([
            "..~",
            ".#.",
            "...",
        ])
        return TerrainProblem(terrain, Location(0, 0), Location(2, 2))

    def test_contract(self, problem):
        assert problem.initial_location() == Location(0, 0)
        assert problem.is_goal(Location(2, 2))
        assert not problem.is_goal(Location(0, 0))
        assert problem.heuristic(Location(0, 0)) == 4.0
        assert problem.heuristic(Location(2, 2)) == 0.0

    def test_successors_skip_walls_and_edges(self, problem):
        succ = list(problem.successors(Location(1, 0)))
        assert [(a, loc) for a, loc, _ in succ] == [
            ("Left", Location(0, 0)),
            ("Right", Location(2, 0)),
        ]

    def test_edge_cost_is_cost_of_entered_cell(self, problem):
        costs = {a: c for a, _, c in problem.successors(Location(1, 0))}
        assert costs == {"Left": GRASS_COST, "Right": MUD_COST}

    def test_is_mud(self, problem):
        assert problem.is_mud(Location(2, 0))
        assert not problem.is_mud(Location(0, 0))

    @pytest.mark.parametrize("start,goal", [
        (Location(-1, 0), Location(2, 2)),
        (Location(0, 0), Location(3, 2)),
        (Location(0, 5), Location(0, 0)),
    ])
    def test_out_of_range_fails_fast(self, start, goal):
        with pytest.raises(InvalidLocationError, match="outside"):
            TerrainProblem(TerrainMap.uniform(3, 3), start, goal)

    def test_goal_on_wall(self):
        with pytest.raises(InvalidLocationError, match="wall"):
            TerrainProblem(TerrainMap.from_rows(["..#"]), Location(0, 0), Location(2, 0))

    def test_invalid_location_is_value_error(self):
        assert issubclass(InvalidLocationError, ValueError)

    def test_make_terrain_problem(self):
        p = make_terrain_problem(6, 4, 0.4, seed=5)
        assert p.start == Location(0, 0)
        assert p.goal == Location(5, 3)
        assert p.terrain.width == 6
        assert not p.is_mud(p.start)
        assert not p.is_mud(p.goal)

    def test_make_terrain_problem_bad_goal(self):
        with pytest.raises(InvalidLocationError):
            make_terrain_problem(4, 4, 0.2, seed=0, goal=Location(4, 0))

    @pytest.mark.parametrize("seed", range(5))
    def test_sanity_check(self, seed):
        assert sanity_check_problem(make_terrain_problem(8, 8, 0.3, seed=seed)).startswith("OK")

    def test_reachable_locations(self):
        terrain = TerrainMap.from_rows([
            "..#.",
            "..#.",
        ])
        problem = TerrainProblem(terrain, Location(0, 0), Location(3, 1))
        assert reachable_locations(problem) == {(0, 0), (1, 0), (0, 1), (1, 1)}

    def test_reachable_locations_warns_when_capped(self, caplog):
        problem = TerrainProblem(TerrainMap.uniform(5, 5), Location(0, 0), Location(4, 4))
        with caplog.at_level("WARNING", logger="terrain_lab.problems.checks"):
            seen = reachable_locations(problem, max_states=3)
        assert len(seen) < 25
        assert "incomplete" in caplog.text

    def test_reachable_locations_silent_when_complete(self, caplog):
        problem = TerrainProblem(TerrainMap.uniform(3, 3), Location(0, 0), Location(2, 2))
        with caplog.at_level("WARNING", logger="terrain_lab.problems.checks"):
            assert len(reachable_locations(problem)) == 9
        assert "incomplete" not in caplog.text


class TestTerrainConfig:

    def test_defaults_are_valid(self):
        cfg = TerrainConfig()
        assert cfg.width >= 1 and cfg.height >= 1
        assert 0.0 <= cfg.mud_probability <= 1.0

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TERRAIN_WIDTH", "12")
        monkeypatch.setenv("TERRAIN_HEIGHT", "7")
        monkeypatch.setenv("TERRAIN_MUD_PROB", "0.25")
        monkeypatch.setenv("TERRAIN_SEED", "99")
        cfg = TerrainConfig.from_env()
        assert (cfg.width, cfg.height, cfg.mud_probability, cfg.seed) == (12, 7, 0.25, 99)

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("TERRAIN_WIDTH", "12")
        monkeypatch.delenv("TERRAIN_SEED", raising=False)
        cfg = TerrainConfig.from_env(width=5, seed=None)
        assert cfg.width == 5
        assert cfg.seed is None

    def test_invalid(self):
        with pytest.raises(ValueError):
            TerrainConfig(width=0)
        with pytest.raises(ValueError):
            TerrainConfig(mud_probability=2.0)
