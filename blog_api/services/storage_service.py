# blog_api/services/storage_service.py
import uuid
import logging
from pathlib import Path
from typing import Optional

from flask import Flask
from werkzeug.security import safe_join
from werkzeug.utils import secure_filename

from blog_api.core.errors import StorageError

def generate_blob_name(filename: str) -> str:
    """
    Build a collision-resistant blob name from an uploaded file's original name.

    ``"my.holiday.png"`` becomes ``"my<uuid4>.png"``: the part before the first dot,
    a fresh uuid4 and the last extension segment. Names without an extension get none.
    Stem and extension are sanitised separately, so ``"사진.png"`` still ends in ``.png``.
    """
    parts = (filename or "").split('.')
    stem = secure_filename(parts[0])
    unique = str(uuid.uuid4())
    extension = secure_filename(parts[-1]) if len(parts) > 1 else ""
    if not extension:
        return f"{stem}{unique}"
    return f"{stem}{unique}.{extension}"

class StorageService:
    """
    Filesystem-backed blob store for thumbnails and avatars.
    Every read, write and delete stays inside the configured upload folder.
    """

    def __init__(self, upload_folder: Optional[str] = None):
        """
        The folder may be given directly (tests) or later through init_app.

        :param upload_folder: directory that holds every stored blob
        """
        self.upload_folder: Optional[Path] = None
        if upload_folder:
            self._set_folder(upload_folder)

    def init_app(self, app: Flask):
        """
        Called once from create_app to point the service at UPLOAD_FOLDER.

        :param app: Flask application object
        """
        folder = app.config.get('UPLOAD_FOLDER')
        if not folder:
            raise ValueError("UPLOAD_FOLDER must be configured.")
        self._set_folder(folder)
        logging.info(f"StorageService: storing uploads in {self.upload_folder}")

    def _set_folder(self, folder: str):
        self.upload_folder = Path(folder).resolve()
        self.upload_folder.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        """
        Absolute path of a blob. Rejects names that would leave the upload folder.

        :param name: blob name as stored on a record
        """
        if not self.upload_folder:
            raise RuntimeError("StorageService is not initialised. Call init_app first.")
        joined = safe_join(str(self.upload_folder), name) if name else None
        if joined is None:
            raise StorageError(f"Invalid blob name: {name!r}")
        return Path(joined)

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def save(self, name: str, data: bytes) -> str:
        """
        Write bytes under the given blob name and return the name.

        :raises StorageError: when the file cannot be written
        """
        path = self.path_for(name)
        try:
            path.write_bytes(data)
        except OSError as e:
            logging.error(f"Blob write failed (name: {name}): {e}", exc_info=True)
            raise StorageError(f"Could not store file {name}.") from e
        logging.info(f"Stored blob {name} ({len(data)} bytes)")
        return name

    def delete(self, name: str) -> None:
        """
        Remove a blob.

        :raises FileNotFoundError: when no blob with that name exists
        :raises StorageError: for any other filesystem failure
        """
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError:
            raise
        except OSError as e:
            logging.error(f"Blob delete failed (name: {name}): {e}", exc_info=True)
            raise StorageError(f"Could not delete file {name}.") from e
        logging.info(f"Deleted blob {name}")

    def discard(self, name: str) -> None:
        """
        Delete a blob that may already be gone. A missing blob counts as deleted;
        other failures still raise StorageError.
        """
        try:
            self.delete(name)
        except FileNotFoundError:
            logging.warning(f"Blob {name} was already missing; treating it as deleted.")
