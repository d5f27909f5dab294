from enum import IntEnum


# https://www.arscreatio.com/repositorio/images/n_23/SC031-N-1915-18004Text.pdf#page=61
class ErrorCorrection(IntEnum):
    LOW = 0b01
    MEDIUM = 0b00
    QUARTILE = 0b11
    HIGH = 0b10

    @property
    def label(self) -> str:
        return self.name[0]

    @property
    def index(self) -> int:
        """Column of this level in the ISO capacity tables (L, M, Q, H)."""
        return LEVEL_ORDER.index(self)

    @classmethod
    def parse(cls, value: "ErrorCorrection | str") -> "ErrorCorrection":
        """Accept a member, a single letter label ("L") or a member name ("low")."""
        if isinstance(value, ErrorCorrection):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Cannot interpret {value!r} as an error correction level")

        key = value.strip().upper()
        for level in cls:
            if key == level.label or key == level.name:
                return level

        raise ValueError(f"Unknown error correction level {value!r}. Expected one of L, M, Q, H")


LEVEL_ORDER: tuple[ErrorCorrection, ...] = (
    ErrorCorrection.LOW,
    ErrorCorrection.MEDIUM,
    ErrorCorrection.QUARTILE,
    ErrorCorrection.HIGH,
)
