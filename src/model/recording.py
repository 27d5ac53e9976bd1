import os
import uuid
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)

RECORDING_PREFIX = "rec_"
RECORDING_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class RecordingFormat:
    """Encoder settings used for new recordings (AAC in an MPEG-4 container)."""

    CODEC = "aac"
    EXTENSION = ".m4a"
    SAMPLE_RATE = 44100
    CHANNELS = 1


def recording_filename(created_at: datetime) -> str:
    """File name for a recording started at created_at, e.g. rec_20250811_142530.m4a"""
    return f"{RECORDING_PREFIX}{created_at.strftime(RECORDING_TIMESTAMP_FORMAT)}{RecordingFormat.EXTENSION}"


@dataclass
class Recording:
    """A saved recording on disk"""

    filename: str
    file_path: str
    created_at: datetime = field(default_factory=datetime.now)
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    # Filled in once the file has been probed
    duration: Optional[float] = None
    file_size: Optional[int] = None

    @classmethod
    def create(cls, directory: str, created_at: Optional[datetime] = None) -> "Recording":
        """Describe a new recording to be written into directory."""
        created_at = created_at or datetime.now()
        filename = recording_filename(created_at)
        recording = cls(filename=filename, file_path=os.path.join(directory, filename), created_at=created_at)
        logger.debug(f"New recording: {recording.file_path}")
        return recording

    @property
    def display_name(self) -> str:
        return os.path.basename(self.file_path)

    @property
    def has_duration(self) -> bool:
        return self.duration is not None and self.duration > 0


@dataclass
class AppSettings:
    """User settings kept alongside the recordings"""

    is_monitoring_enabled: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    last_updated: datetime = field(default_factory=datetime.now)

    def set_monitoring_enabled(self, enabled: bool, now: Optional[datetime] = None):
        self.is_monitoring_enabled = enabled
        self.last_updated = now or datetime.now()
