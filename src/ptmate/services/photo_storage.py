"""Local file storage for progress photos."""

import logging
import re
import shutil
import uuid
from pathlib import Path

from ..models.photo import Photo

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_file_name(file_name: str) -> str:
    """Strip directories and unsafe characters from an uploaded file name."""
    name = Path(file_name or "photo").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "photo"


class PhotoStorage:
    """Stores uploaded photos under ``<upload_dir>/<client_id>/``.

    Files are served back by the web app from ``/uploads``.
    """

    def __init__(self, upload_dir: Path):
        self.upload_dir = upload_dir

    def client_dir(self, client_id: int) -> Path:
        return self.upload_dir / str(client_id)

    def save(
        self,
        client_id: int,
        file_name: str,
        content: bytes,
        content_type: str = "",
    ) -> Photo:
        """Write one photo to disk and describe it."""
        directory = self.client_dir(client_id)
        directory.mkdir(parents=True, exist_ok=True)

        stored_name = f"{uuid.uuid4().hex[:12]}_{safe_file_name(file_name)}"
        (directory / stored_name).write_bytes(content)

        return Photo(
            url=f"{UPLOAD_URL_PREFIX}/{client_id}/{stored_name}",
            file_name=file_name,
            file_size=len(content),
            content_type=content_type,
        )

    def path_for(self, photo: Photo) -> Path:
        """Filesystem path of a stored photo."""
        relative = photo.url.removeprefix(UPLOAD_URL_PREFIX).lstrip("/")
        return self.upload_dir / relative

    def delete(self, photos: list[Photo]) -> None:
        """Remove stored files; files already gone are ignored."""
        for photo in photos:
            path = self.path_for(photo)
            if path.resolve().is_relative_to(self.upload_dir.resolve()):
                path.unlink(missing_ok=True)

    def delete_client(self, client_id: int) -> None:
        """Remove every stored photo for a client."""
        directory = self.client_dir(client_id)
        if directory.exists():
            shutil.rmtree(directory)
            logger.info("Removed photo directory %s", directory)
