# hivegame

This package provides building blocks for playing the Hive board game and for learning it by self-play.

## Modules

- `hivegame.piece` defines `Color` (`BLACK`, `WHITE`, with `opposing()`),
  `ColorMap` (one value per colour, with `get`, `set`, `black`, `white`),
  `Insect` (`GRASSHOPPER`, `QUEEN_BEE`, `BEETLE`, `SPIDER`, `SOLDIER_ANT`) and
  the frozen, ordered `Piece(role, color, id)` dataclass. Pieces have a short
  text notation. A letter is followed by an optional id digit from 0 to 3, and
  the id defaults to 0. Lower case letters are white pieces and upper case
  letters are black ones: `q`/`Q` queen bee, `a`/`A` soldier ant, `b`/`B`
  beetle, `g`/`G` grasshopper, `s`/`S` spider. `Piece.from_str` and
  `Piece.from_char_pair` parse this notation and return `None` for invalid
  input. `str(piece)` formats a piece in the same notation, for example `Q0`.
- `hivegame.hand` defines `Hand`, the tiles a player has not yet placed. A hand
  starts with 1 queen bee, 3 soldier ants, 3 grasshoppers, 2 beetles and 2
  spiders. Its methods are `has_queen`, `has_insect`, `next_insect_id`,
  `pop_tile`, `push_tile` and `copy`. `pop_tile` returns `(insect, id)` or
  `None` when no tile of that insect is left.
- `hivegame.movement` defines the three kinds of move: `PlacePiece(piece, position)`,
  `MovePiece(piece, from_, to)` and `Pass()`. Moves are frozen and hashable.
  They are ordered first by kind and then by their fields.
- `hivegame.position` defines `Position(x, y)` on an axial hex grid, along with
  `Direction` and `DirectionMap`.
  - `is_adjacent` tells whether two positions are neighbours.
  - `neighbors(dim)` yields the on-board `(direction, position)` pairs,
    starting at the top left and going clockwise.
  - `neighbor(direction, dim)` returns the neighbour in one direction, or
    `None` when it lies off the board.
  - `to_cube_coords` gives the cube coordinates of a position.
  - `rotate_clockwise_around_center` rotates a position around a centre.
    Rotating off the board raises `RotationOutOfBounds` or
    `PositionOutOfBounds`, both subclasses of `HiveError`.
- `hivegame.hypers` holds the training hyper-parameters as module constants,
  such as `INPUT_ENCODED_DIMS`, `OUTPUT_LENGTH`, `GAMMA`, `LAMBDA` and
  `MAX_FRAMES_PER_GAME`.
- `hivegame.frames` defines `SingleGame` and `MultipleGames`, the frame buffers
  for self-play.
  - `MultipleGames.ingest_game(other, winner, gamma, lambda_, max_frames_per_game)`
    computes generalised advantage estimates and value targets for a finished
    game.
    - The reward is +0.5 for a white win, -0.5 for a black win and 0 for no
      winner. Games shorter than `APPROXIMATE_TURN_MEMORY` use a rescaled
      gamma.
    - Only the last `max_frames_per_game` frames are kept, and the
      `SingleGame` is cleared afterwards.
    - A game whose buffers have mismatched lengths, or that has no frames,
      raises `ValueError`.
- `hivegame.metrics` is an in-process meter provider.
  - It provides `MeterProvider`, `Counter`, `Gauge` and `Histogram`, each
    keyed by an attribute mapping.
  - `get_meter_provider()` returns the current global provider and
    `init_meter_provider()` replaces it.
  - Helper functions record training figures into the global provider, for
    example `record_epoch`, `increment_games_played`, `increment_move_made`,
    `record_game_turns` and `record_minibatch_statistics`.
  - Counters reject negative amounts. Shutting a provider down twice raises
    `RuntimeError`.
- `hivegame.model` defines `HiveModel`, a residual convolutional network built
  on numpy.
  - It takes `[batch, 30, 26, 26]` inputs.
  - `value_policy` returns `(value, policy_logits)` with values in
    (-0.5, 0.5), and `policy` returns only the logits.
  - `set_train_mode` switches batch normalisation between batch and running
    statistics.
  - Weights are drawn at random, and a `seed` argument makes them
    reproducible.
- `hivegame.model2` defines a second `HiveModel` built from plain convolutions
  and dense layers. It expects `[batch, 30, 32, 32]` inputs. The module also
  defines `MultiHeadSelfAttention(embed_dim, total, nheads)`, whose `forward`
  method accepts a boolean or additive float attention mask.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from hivegame.piece import Color, Insect, Piece
from hivegame.hand import Hand
from hivegame.movement import PlacePiece
from hivegame.position import Position

hand = Hand()
insect, ident = hand.pop_tile(Insect.QUEEN_BEE)
queen = Piece(role=insect, color=Color.WHITE, id=ident)

move = PlacePiece(piece=queen, position=Position(16, 16))

for direction, neighbour in Position(16, 16).neighbors(26):
    print(direction, neighbour)

assert Piece.from_str("Q0") == Piece(Insect.QUEEN_BEE, Color.BLACK, 0)
```

## What this package does not do

- It has no board and no game state, and it does not implement the game
  rules. It cannot generate legal moves or detect a winner.
- It has no search agent, no board-to-tensor encoding and no self-play loop.
- There is no command-line program.
- The networks run forward passes only. They cannot be trained, and their
  weights cannot be saved or loaded.
- Metrics stay in memory and are not exported anywhere.