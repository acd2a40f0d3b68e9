"""
Storage collaborator used by the catalogs, the workout log and the program engine.

Paths are vault-relative POSIX strings such as "Workouts/2026-01-20-push.md".
"""
from pathlib import Path
from typing import List, Protocol, Union

from pydantic import BaseModel


class FolderContents(BaseModel):
    path: str
    documents: List[str]


class FolderNotFound(BaseModel):
    path: str


class NotAFolder(BaseModel):
    path: str


ListResult = Union[FolderContents, FolderNotFound, NotAFolder]


class Vault(Protocol):
    def read_document(self, path: str) -> str: ...

    def write_document(self, path: str, text: str) -> None: ...

    def document_exists(self, path: str) -> bool: ...

    def delete_document(self, path: str) -> None: ...

    def list_documents(self, folder: str) -> ListResult:
        """Direct *.md children of `folder`, sorted. Subfolders are not descended into."""

    def folder_exists(self, path: str) -> bool: ...

    def create_folder(self, path: str) -> None: ...

    def most_recently_modified(self, paths: List[str]) -> str: ...


def join_path(folder: str, name: str) -> str:
    folder = folder.strip("/")
    return f"{folder}/{name}" if folder else name


def basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def stem(path: str) -> str:
    name = basename(path)
    return name[:-3] if name.endswith(".md") else name


def ensure_folder(vault: Vault, folder: str) -> None:
    if not vault.folder_exists(folder):
        vault.create_folder(folder)


class FileSystemVault:
    """Vault backed by a directory on the local file system"""

    def __init__(self, root):
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self.root / path

    def read_document(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def write_document(self, path: str, text: str) -> None:
        self._resolve(path).write_text(text, encoding="utf-8")

    def document_exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def delete_document(self, path: str) -> None:
        self._resolve(path).unlink()

    def list_documents(self, folder: str) -> ListResult:
        target = self._resolve(folder)
        if not target.exists():
            return FolderNotFound(path=folder)
        if not target.is_dir():
            return NotAFolder(path=folder)

        documents = sorted(
            join_path(folder, child.name)
            for child in target.iterdir()
            if child.is_file() and child.suffix == ".md"
        )
        return FolderContents(path=folder, documents=documents)

    def folder_exists(self, path: str) -> bool:
        return self._resolve(path).is_dir()

    def create_folder(self, path: str) -> None:
        self._resolve(path).mkdir(parents=True, exist_ok=True)

    def most_recently_modified(self, paths: List[str]) -> str:
        return max(paths, key=lambda p: self._resolve(p).stat().st_mtime)
