"""JSON file storage: one file per key in a directory."""

from pathlib import Path

from property_sim.exceptions import StorageError


class JsonFileStorage:
    """Persist blobs as ``<directory>/<key>.json``."""

    def __init__(self, directory: str | Path) -> None:
        """Initialize JSON file storage.

        Parameters
        ----------
        directory : str | Path
            Directory holding the save files. Created if missing.
        """
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        file_path = self.path_for(key)
        if not file_path.exists():
            return None
        try:
            return file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Failed to read {file_path}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        file_path = self.path_for(key)
        tmp_path = file_path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(value)
            tmp_path.replace(file_path)
        except OSError as exc:
            raise StorageError(f"Failed to write {file_path}: {exc}") from exc
