"""Data models for the Git objects on the notes read path."""

import base64
from dataclasses import dataclass, field
from typing import Any, Iterator

from .errors import BlobDecodeError, MalformedResponseError


def _field(data: Any, *keys: str) -> Any:
    """Walk nested keys of an API payload, failing loudly on a missing one."""
    value = data
    for key in keys:
        if not isinstance(value, dict) or key not in value:
            raise MalformedResponseError(f"Missing field '{'.'.join(keys)}' in API response")
        value = value[key]
    return value


@dataclass
class Ref:
    """A Git reference and the object it points at."""
    
    ref: str
    sha: str
    type: str = "commit"
    
    @classmethod
    def from_api(cls, data: dict) -> "Ref":
        return cls(
            ref=_field(data, "ref"),
            sha=_field(data, "object", "sha"),
            type=data["object"].get("type", "commit"),
        )


@dataclass
class Commit:
    """A commit, reduced to the tree it records."""
    
    sha: str
    tree_sha: str
    
    @classmethod
    def from_api(cls, data: dict) -> "Commit":
        return cls(
            sha=data.get("sha", "") if isinstance(data, dict) else "",
            tree_sha=_field(data, "tree", "sha"),
        )


@dataclass
class TreeEntry:
    """One named entry of a tree."""
    
    path: str
    type: str
    sha: str
    
    @property
    def is_blob(self) -> bool:
        return self.type == "blob"


@dataclass
class Tree:
    """
    An ordered listing of tree entries.
    
    Entries keep the order the API returned them in. Only the top level is
    read; subtrees show up as entries of type "tree" and are never expanded.
    """
    
    sha: str
    entries: list[TreeEntry] = field(default_factory=list)
    truncated: bool = False
    
    @classmethod
    def from_api(cls, data: dict) -> "Tree":
        raw_entries = _field(data, "tree")
        if not isinstance(raw_entries, list):
            raise MalformedResponseError("Field 'tree' in API response is not a list")
        
        return cls(
            sha=data.get("sha", ""),
            entries=[
                TreeEntry(
                    path=_field(e, "path"),
                    type=_field(e, "type"),
                    sha=_field(e, "sha"),
                )
                for e in raw_entries
            ],
            truncated=bool(data.get("truncated", False)),
        )
    
    def blobs(self) -> Iterator[TreeEntry]:
        """Yield blob entries in tree order, skipping everything else."""
        return (e for e in self.entries if e.is_blob)


@dataclass
class Blob:
    """Raw blob content as delivered by the API."""
    
    sha: str
    content: str
    encoding: str = "base64"
    
    @classmethod
    def from_api(cls, data: dict) -> "Blob":
        content = _field(data, "content")
        if not isinstance(content, str):
            raise MalformedResponseError(f"Blob {data.get('sha', '')}: content is not a string")
        
        return cls(
            sha=data.get("sha", ""),
            content=content,
            encoding=data.get("encoding", "base64"),
        )
    
    def decode(self) -> str:
        """
        Decode the blob payload into text.
        
        GitHub wraps base64 content at 60 columns; the embedded newlines are
        discarded by the decoder.
        
        Raises:
            BlobDecodeError: unknown encoding, bad or non-ASCII base64, non UTF-8 bytes
        """
        if self.encoding == "utf-8":
            return self.content
        if self.encoding != "base64":
            raise BlobDecodeError(f"Blob {self.sha}: unsupported encoding '{self.encoding}'")
        
        # binascii.Error and UnicodeDecodeError are both ValueErrors
        try:
            raw = base64.b64decode(self.content)
            return raw.decode("utf-8")
        except (ValueError, TypeError) as e:
            raise BlobDecodeError(f"Blob {self.sha}: cannot decode content ({e})") from e


@dataclass
class Note:
    """Note text attached to a commit."""
    
    path: str  # annotated commit hash, as named in the notes tree
    text: str
    
    @classmethod
    def from_blob(cls, entry: TreeEntry, blob: Blob) -> "Note":
        return cls(path=entry.path, text=blob.decode().rstrip())
