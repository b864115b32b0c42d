"""Query and display value types shared by the API, formatter and prompt layers."""

from dataclasses import dataclass
from datetime import datetime

from .errors import ValidationError

TIMESEL_CHOICES = ("departure", "arrival")
TRANSPORT_TYPES = ("automatic", "trains", "nointernationaltrains", "all")

# Tones a formatter can tag its output with
PLAIN = "plain"
WARNING = "warning"
SUCCESS = "success"


def _now():
    """Current local time. Extracted for test patching."""
    return datetime.now()


class Styled(str):
    """A display string tagged with the tone the presentation layer should apply.

    Compares equal to the plain string it wraps, so callers that only care
    about the text can ignore the tone.
    """

    tone: str

    def __new__(cls, text: str = "", tone: str = PLAIN):
        obj = super().__new__(cls, text)
        obj.tone = tone
        return obj

    def __repr__(self) -> str:
        return f"Styled({str.__repr__(self)}, tone={self.tone!r})"


@dataclass(frozen=True)
class Query:
    """A connections request, built once per invocation."""
    from_station: str
    to_station: str
    date: str
    time: str
    timesel: str = "departure"
    type_of_transport: str = "all"

    def __post_init__(self):
        if not self.from_station or not self.to_station:
            raise ValidationError("both a departure and a destination station are required")
        if self.timesel not in TIMESEL_CHOICES:
            raise ValidationError(f"timesel must be one of {', '.join(TIMESEL_CHOICES)}, got {self.timesel!r}")
        if self.type_of_transport not in TRANSPORT_TYPES:
            raise ValidationError(f"unknown transport type {self.type_of_transport!r}")

    def to_params(self) -> dict[str, str]:
        """Query parameters for the connections endpoint."""
        return {
            "from": self.from_station,
            "to": self.to_station,
            "timesel": self.timesel,
            "typeOfTransport": self.type_of_transport,
            "date": self.date,
            "time": self.time,
        }
