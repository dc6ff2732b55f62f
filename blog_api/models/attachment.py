# blog_api/models/attachment.py
from dataclasses import dataclass

from werkzeug.datastructures import FileStorage

@dataclass
class Attachment:
    """An uploaded file as the services see it: original name plus raw bytes."""
    filename: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_file_storage(cls, file: FileStorage) -> "Attachment":
        """Read a multipart upload into memory."""
        return cls(filename=file.filename or "", data=file.read())
