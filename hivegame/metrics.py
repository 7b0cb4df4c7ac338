"""In-process training metrics: counters, gauges and histograms."""

from __future__ import annotations

import threading
import time
from bisect import bisect_left
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from hivegame.movement import MovePiece, PlacePiece
from hivegame.piece import Color, Insect

SCOPE_NAME = "training"
SCOPE_VERSION = "1.0"

_AttrKey = Tuple[Tuple[str, str], ...]


def _key(attributes: Optional[Mapping[str, str]]) -> _AttrKey:
    return tuple(sorted((attributes or {}).items()))


class _Instrument:
    def __init__(self, name: str, description: str = "", unit: str = "") -> None:
        self.name = name
        self.description = description
        self.unit = unit
        self._lock = threading.Lock()


class Counter(_Instrument):
    """A monotonically increasing sum per attribute set."""

    def __init__(self, name: str, description: str = "", unit: str = "") -> None:
        super().__init__(name, description, unit)
        self._totals: Dict[_AttrKey, float] = {}

    def add(self, amount: float, attributes: Optional[Mapping[str, str]] = None) -> None:
        if amount < 0:
            raise ValueError("counters cannot be decreased")
        key = _key(attributes)
        with self._lock:
            self._totals[key] = self._totals.get(key, 0) + amount

    def value(self, attributes: Optional[Mapping[str, str]] = None) -> float:
        with self._lock:
            return self._totals.get(_key(attributes), 0)


class Gauge(_Instrument):
    """The last recorded value per attribute set."""

    def __init__(self, name: str, description: str = "", unit: str = "") -> None:
        super().__init__(name, description, unit)
        self._values: Dict[_AttrKey, float] = {}

    def record(self, value: float, attributes: Optional[Mapping[str, str]] = None) -> None:
        with self._lock:
            self._values[_key(attributes)] = value

    def value(self, attributes: Optional[Mapping[str, str]] = None) -> Optional[float]:
        with self._lock:
            return self._values.get(_key(attributes))


class Histogram(_Instrument):
    """Counts of recorded values per bucket, per attribute set.

    Bucket ``i`` holds values in ``(boundaries[i-1], boundaries[i]]``; the last
    bucket holds everything above the final boundary.
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        unit: str = "",
        boundaries: Sequence[float] = (),
    ) -> None:
        super().__init__(name, description, unit)
        self.boundaries: List[float] = sorted(boundaries)
        self._buckets: Dict[_AttrKey, List[int]] = {}

    def record(self, value: float, attributes: Optional[Mapping[str, str]] = None) -> None:
        index = bisect_left(self.boundaries, value)
        key = _key(attributes)
        with self._lock:
            counts = self._buckets.setdefault(key, [0] * (len(self.boundaries) + 1))
            counts[index] += 1

    def bucket_counts(self, attributes: Optional[Mapping[str, str]] = None) -> List[int]:
        with self._lock:
            counts = self._buckets.get(_key(attributes))
            return list(counts) if counts else [0] * (len(self.boundaries) + 1)


class MeterProvider:
    """Creates and holds instruments by name."""

    def __init__(self, scope: str = SCOPE_NAME, version: str = SCOPE_VERSION) -> None:
        self.scope = scope
        self.version = version
        self._instruments: Dict[str, _Instrument] = {}
        self._lock = threading.Lock()
        self._shut_down = False

    def _get_or_create(self, kind, name: str, **kwargs):
        with self._lock:
            instrument = self._instruments.get(name)
            if instrument is None:
                instrument = kind(name, **kwargs)
                self._instruments[name] = instrument
            elif type(instrument) is not kind:
                raise ValueError(
                    f"instrument {name!r} already registered as {type(instrument).__name__}"
                )
            return instrument

    def counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        return self._get_or_create(Counter, name, description=description, unit=unit)

    def gauge(self, name: str, description: str = "", unit: str = "") -> Gauge:
        return self._get_or_create(Gauge, name, description=description, unit=unit)

    def histogram(
        self,
        name: str,
        description: str = "",
        unit: str = "",
        boundaries: Sequence[float] = (),
    ) -> Histogram:
        return self._get_or_create(
            Histogram, name, description=description, unit=unit, boundaries=boundaries
        )

    @property
    def is_shut_down(self) -> bool:
        return self._shut_down

    def shutdown(self) -> None:
        """Stop the provider; shutting down twice is an error."""
        with self._lock:
            if self._shut_down:
                raise RuntimeError("meter provider is already shut down")
            self._shut_down = True


_provider = MeterProvider()


def get_meter_provider() -> MeterProvider:
    """Return the provider that the record functions write to."""
    return _provider


def init_meter_provider() -> MeterProvider:
    """Install a fresh provider as the global one and return it."""
    global _provider
    _provider = MeterProvider()
    return _provider


def _color_name(color: Color) -> str:
    return "black" if color is Color.BLACK else "white"


_INSECT_NAMES = {
    Insect.GRASSHOPPER: "grasshopper",
    Insect.QUEEN_BEE: "queen_bee",
    Insect.BEETLE: "beetle",
    Insect.SPIDER: "spider",
    Insect.SOLDIER_ANT: "soldier_ant",
}


def record_epoch(epoch: int) -> None:
    get_meter_provider().gauge(
        "epoch",
        "a counter for every time the opponent version is upgraded",
        "times",
    ).record(int(epoch))


def record_training_start_time() -> None:
    get_meter_provider().gauge("train_start_time", "training start time").record(
        float(int(time.time()))
    )


def record_training_status(is_training: bool) -> None:
    get_meter_provider().gauge(
        "is_training", "Is the model currently training"
    ).record(1.0 if is_training else 0.0)


def increment_leveled_up_opponent() -> None:
    get_meter_provider().counter(
        "opponent_version_increased_total",
        "a counter for every time the opponent version is upgraded",
        "times",
    ).add(1)


def increment_games_played(model_color: Color) -> None:
    get_meter_provider().counter(
        "games_played_total", "a counter for games started.", "games"
    ).add(1, {"model_color": _color_name(model_color)})


def increment_games_finished(model_color: Color, winner: Optional[Color]) -> None:
    winner_name = "draw" if winner is None else _color_name(winner)
    get_meter_provider().counter(
        "games_finished_total", "a counter for games finished.", "games"
    ).add(1, {"model_color": _color_name(model_color), "winner": winner_name})


def increment_move_made(mv, model_color: Color) -> None:
    if isinstance(mv, MovePiece):
        move_type = "move_piece"
    elif isinstance(mv, PlacePiece):
        move_type = "place_piece"
    else:
        move_type = "pass"
    piece = (
        _INSECT_NAMES[mv.piece.role]
        if isinstance(mv, (MovePiece, PlacePiece))
        else "none"
    )
    get_meter_provider().counter(
        "moves_made_total", "a counter for every move the model makes"
    ).add(
        1,
        {
            "move_type": move_type,
            "piece": piece,
            "model_color": _color_name(model_color),
        },
    )


def increment_model_won(model_color: Color) -> None:
    get_meter_provider().counter(
        "model_won_total", "a counter for games won by model.", "games"
    ).add(1, {"model_color": _color_name(model_color)})


def record_game_turns(game_turns: int, model_color: Color) -> None:
    get_meter_provider().histogram(
        "turns_played",
        "the number of turns in a game.",
        "games",
        [20.0 * x for x in range(100)],
    ).record(int(game_turns), {"model_color": _color_name(model_color)})


def record_game_duration(game_duration: float, model_color: Color) -> None:
    get_meter_provider().histogram(
        "game_duration",
        "the wall clock duration of a game.",
        "s",
        [0.05 * i for i in range(200)],
    ).record(game_duration, {"model_color": _color_name(model_color)})


def record_training_duration(duration: float) -> None:
    get_meter_provider().gauge(
        "training_duration", "the wall clock duration of a game.", "s"
    ).record(duration)


def record_data_generation_duration(duration: float) -> None:
    get_meter_provider().gauge(
        "training_data_generation_duration",
        "the wall clock time to generate the training data.",
        "s",
    ).record(duration)


def record_learning_rate(lr: float) -> None:
    get_meter_provider().gauge(
        "learning_rate", "the learning rate used during training."
    ).record(lr)


def record_entropy_loss_scale(scale: float) -> None:
    get_meter_provider().gauge(
        "entropy_loss_scale", "the scale factor for entropy loss"
    ).record(scale)


def record_value_mse(mse: float) -> None:
    get_meter_provider().gauge(
        "value_fn_mse", "the mse of the value function during a train loop"
    ).record(mse)


def record_training_batches(batch_count: int) -> None:
    get_meter_provider().gauge(
        "training_batch_count", "the number of iterations run during a training loop"
    ).record(int(batch_count))


def record_win_rate_vs_initial(win_rate: float) -> None:
    get_meter_provider().gauge(
        "win_rate_vs_random", "a counter for games won by model."
    ).record(win_rate)


def record_minibatch_statistics(
    value_loss: float, policy_loss: float, entropy_loss: float
) -> None:
    provider = get_meter_provider()
    provider.counter(
        "training_iterations_count_total",
        "a counter for the number of training iterations run.",
    ).add(1)
    provider.counter(
        "training_value_loss_total",
        "a counter for the total value loss during training.",
    ).add(value_loss)
    provider.counter(
        "training_policy_loss_total",
        "a counter for the total policy loss during training.",
    ).add(policy_loss)
    provider.counter(
        "training_entropy_loss_total",
        "a counter for the total entropy loss during training.",
    ).add(entropy_loss)