"""Post creation from a captured meal photo."""

import base64
import binascii
import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from bitesnaps.domain.models import Post
from bitesnaps.errors import CaptureError, CaptureInProgressError
from bitesnaps.services.analysis import AnalysisPipeline
from bitesnaps.services.store import ProgressStore

logger = logging.getLogger(__name__)

_DATA_URL_PATTERN = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL
)

DEFAULT_USERNAME = "user"


@dataclass
class CaptureService:
    """Runs one analysis per capture and stores the resulting post."""

    pipeline: AnalysisPipeline
    store: ProgressStore
    _in_flight: bool = field(default=False, init=False)

    @property
    def analyzing(self) -> bool:
        """Return True while an analysis is running."""
        return self._in_flight

    async def create_post(self, image_data_url: str, caption: str = "") -> Post:
        """Analyze a captured photo and save it as the newest post."""
        if self._in_flight:
            raise CaptureInProgressError("An analysis is already in progress")
        image_bytes = decode_data_url(image_data_url)

        self._in_flight = True
        try:
            analysis = await self.pipeline.analyze(image_bytes)
        finally:
            self._in_flight = False

        user = self.store.get_user()
        username = user.username if user else DEFAULT_USERNAME
        post = Post(
            id=uuid4().hex,
            user_id=username,
            username=username,
            timestamp=_now_millis(),
            image_url=image_data_url,
            caption=caption,
            analysis=analysis,
            likes=0,
        )
        self.store.save_post(post)
        logger.info("Saved post %s (%s)", post.id, analysis.food_name)
        return post


def decode_data_url(data_url: str) -> bytes:
    """Return the decoded bytes of a base64 image data URL."""
    match = _DATA_URL_PATTERN.match(data_url.strip())
    if match is None or not match.group("mime").startswith("image/"):
        raise CaptureError("Expected a base64 image data URL")
    try:
        return base64.b64decode(match.group("data"), validate=True)
    except binascii.Error as exc:
        raise CaptureError("Image data is not valid base64") from exc


def _now_millis() -> int:
    return int(datetime.now(tz=UTC).timestamp() * 1000)
