from dataclasses import dataclass, asdict, replace
from typing import Optional

DEFAULT_WIDTH = 21
DEFAULT_HEIGHT = 21
DEFAULT_STEP_DELAY = 0.05  # seconds between animated steps
DEFAULT_ALGORITHM = "prim"


@dataclass
class CarveConfig:
    """
    Settings for a generation run. Only the odd-coercion rule is applied by
    the engine; sanity limits on width/height/delay are left to the caller.
    """
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    step_delay: float = DEFAULT_STEP_DELAY
    algorithm: str = DEFAULT_ALGORITHM
    seed: Optional[int] = None
    instant: bool = True

    @classmethod
    def from_args(cls, args) -> "CarveConfig":
        return cls(
            width=args.width,
            height=args.height,
            step_delay=args.delay,
            algorithm=args.algo,
            seed=args.seed,
            instant=args.instant,
        )

    def with_changes(self, **changes) -> "CarveConfig":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)
