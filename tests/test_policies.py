import pytest

from filler.board import Shape, grid_from_rows
from filler.engine import choose_best_placement
from filler.features import (
    TurnContext,
    adjacency,
    claimed_cells,
    min_distance_sq,
    min_manhattan,
)
from filler.policies import (
    DEFAULT_POLICY,
    POLICIES,
    aggressive,
    get_policy,
    rush_then_block,
    space_starving,
)

DOMINO = Shape.from_pattern(["**"])

# Our only way forward on the left is also the opponent's only room.
CORRIDOR = grid_from_rows(["x.o...."])

FAR_APART = grid_from_rows(["x" + "." * 10 + "o" + "." * 8])


def test_features():
    ctx = TurnContext(CORRIDOR, DOMINO)
    assert claimed_cells(ctx, 0, 1) == 1
    assert min_distance_sq(ctx, 0, 1) == 1
    assert min_distance_sq(ctx, 0, 2) == 4
    assert min_manhattan(ctx, 0, 2) == 2
    assert adjacency(ctx, 0, 1) == (1, 2, 1)
    assert adjacency(ctx, 0, 2) == (0, 3, 0)
    assert ctx.territory_distance() == 2
    assert ctx.enemy_reach == 1
    assert ctx.my_reach == 5


def test_distances_without_opponent():
    ctx = TurnContext(grid_from_rows(["o.."]), DOMINO)
    assert min_distance_sq(ctx, 0, 0) == 0
    assert min_manhattan(ctx, 0, 0) == 0
    assert ctx.territory_distance() == -1


def test_space_starving_prefers_denying_the_opponent():
    ctx = TurnContext(CORRIDOR, DOMINO)
    assert space_starving(ctx, 0, 1) == 100 * 1 + 10 * 4 + 1
    assert space_starving(ctx, 0, 2) == 100 * 0 + 10 * 4 + 1
    assert choose_best_placement(CORRIDOR, DOMINO, space_starving) == (0, 1)


def test_default_policy_is_space_starving():
    assert DEFAULT_POLICY == "space-starving"
    assert choose_best_placement(CORRIDOR, DOMINO) == (0, 1)


def test_aggressive_scores():
    ctx = TurnContext(CORRIDOR, DOMINO)
    assert aggressive(ctx, 0, 1) == 1000 + 5000 * 5 + 300 + 50 + 200
    assert aggressive(ctx, 0, 2) == 1000 + 2000 * 5 + 300
    assert choose_best_placement(CORRIDOR, DOMINO, aggressive) == (0, 1)


def test_rush_then_block_rushes_while_far():
    ctx = TurnContext(FAR_APART, DOMINO)
    assert ctx.territory_distance() == 11
    assert rush_then_block(ctx, 0, 10) == -1000 * 10 + 1
    assert rush_then_block(ctx, 0, 11) == -1000 * 11 + 1
    assert choose_best_placement(FAR_APART, DOMINO, rush_then_block) == (0, 10)


def test_rush_then_block_blocks_when_close():
    ctx = TurnContext(CORRIDOR, DOMINO)
    assert rush_then_block(ctx, 0, 1) == 100 * 1 + 20 * 1 + 1
    assert rush_then_block(ctx, 0, 2) == 1


def test_threshold_variant_changes_mode():
    ctx = TurnContext(FAR_APART, DOMINO)
    # Blocking mode: claiming col 10 takes one cell from the opponent.
    assert POLICIES["rush-then-block"](ctx, 0, 10, threshold=20) == 101
    assert POLICIES["rush-then-block-early"](ctx, 0, 10) == -9999


def test_registry():
    for name in ("space-starving", "aggressive", "rush-then-block"):
        assert get_policy(name) is POLICIES[name]
    with pytest.raises(ValueError):
        get_policy("random")


def test_every_policy_returns_a_legal_move():
    grid = grid_from_rows([
        "...........",
        "..o........",
        "..oo.......",
        "........x..",
        ".......xx..",
    ])
    shape = Shape.from_pattern(["**", ".*"])
    for name, policy in POLICIES.items():
        move = choose_best_placement(grid, shape, policy)
        assert move is not None, name
        top, left = move
        covered = [grid.owner_at(top + dy, left + dx) for dy, dx in shape.cells]
        assert covered.count(1) == 1, name
        assert -1 not in covered, name
