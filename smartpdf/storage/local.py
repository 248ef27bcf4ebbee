import shutil
from pathlib import Path
from typing import IO, Callable, List
from uuid import uuid4

from fastapi import UploadFile

from smartpdf.core.logging import configure_logging

logger = configure_logging("storage")


class RequestFiles:
    """Temporary files owned by a single request.

    Every path handed out by :meth:`new_path` is tracked and deleted when the
    ``with`` block exits, unless ownership was passed on with :meth:`detach`
    (the response then calls the returned cleanup once it has been sent).
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self._paths: List[Path] = []
        self._detached = False

    def __enter__(self) -> "RequestFiles":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None or not self._detached:
            self.cleanup()

    @property
    def paths(self) -> List[Path]:
        return list(self._paths)

    @staticmethod
    def _generate_filename(prefix: str, suffix: str) -> str:
        suffix = suffix if suffix.startswith(".") else f".{suffix.lstrip('.')}"
        return f"{prefix}-{uuid4().hex}{suffix}"

    def new_path(self, prefix: str, suffix: str = ".pdf") -> Path:
        path = self.directory / self._generate_filename(prefix, suffix)
        self._paths.append(path)
        return path

    def save_upload(self, upload: UploadFile) -> Path:
        upload.file.seek(0)
        return self.save_stream(upload.file, prefix="upload")

    def save_stream(self, stream: IO[bytes], *, prefix: str) -> Path:
        target_path = self.new_path(prefix)
        with target_path.open("wb") as buffer:
            shutil.copyfileobj(stream, buffer)
        return target_path

    def detach(self) -> Callable[[], None]:
        self._detached = True
        return self.cleanup

    def cleanup(self) -> None:
        while self._paths:
            path = self._paths.pop()
            try:
                path.unlink(missing_ok=True)
            except OSError:
                logger.exception("Could not delete temporary file %s", path)
