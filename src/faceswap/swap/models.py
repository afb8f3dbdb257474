import enum
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True, slots=True)
class ImageAsset:
    """ Uploaded image kept in memory for the duration of one request """
    data: bytes
    """ Raw file content """
    content_type: str
    """ Content type declared by the client """
    filename: str
    """ Original file name """
    size: int
    """ File size in bytes """


@dataclass(frozen=True, slots=True)
class SwapRequest:
    source: ImageAsset
    """ Image with the face to use """
    target: ImageAsset
    """ Image with the scene to put the face into """


class FailureKind(enum.StrEnum):
    NETWORK_UNREACHABLE = enum.auto()
    PROVIDER_ERROR = enum.auto()
    NO_RESPONSE = enum.auto()
    TIMEOUT = enum.auto()
    UNKNOWN = enum.auto()


@dataclass(frozen=True, slots=True)
class SwapSuccess:
    image: bytes
    content_type: str = "image/jpeg"


@dataclass(frozen=True, slots=True)
class SwapFailure:
    kind: FailureKind
    message: str
    status_code: int | None = None
    """ Provider's HTTP status, set for PROVIDER_ERROR only """
    provider_detail: str | None = None
    """ Diagnostic text, never returned to the client """


SwapOutcome = SwapSuccess | SwapFailure


class SimulationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    simulation: bool = True
    image_url: str = Field(alias="imageUrl")
