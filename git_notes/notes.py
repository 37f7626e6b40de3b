"""Read Git notes from a GitHub repository and print them."""

import logging
from typing import AsyncIterator, Optional

import httpx
from rich.console import Console

from .config import Config
from .github_client import GitHubClient
from .models import Note, Ref, Tree

logger = logging.getLogger(__name__)

# Plain output: no markup, emoji codes or wrapping
console = Console(markup=False, emoji=False, highlight=False, soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


class NotesReader:
    """
    Walks ref -> commit -> tree -> blobs for one notes ref.
    
    Every request is awaited before the next one is issued, so blobs are
    fetched one at a time in tree order.
    """
    
    def __init__(self, client: GitHubClient, notes_ref: str):
        self.client = client
        self.notes_ref = notes_ref
    
    async def find_notes_ref(self) -> Optional[Ref]:
        """Return the first ref matching the notes ref name, if any."""
        refs = await self.client.matching_refs(self.notes_ref)
        if not refs:
            return None
        
        if len(refs) > 1:
            ignored = ", ".join(r.ref for r in refs[1:])
            logger.warning(f"{len(refs)} refs match {self.notes_ref}, using {refs[0].ref} (ignoring {ignored})")
        return refs[0]
    
    async def fetch_notes_tree(self) -> Optional[Tree]:
        """Resolve the notes ref down to its tree; None when the ref does not exist."""
        ref = await self.find_notes_ref()
        if ref is None:
            return None
        
        logger.info(f"Notes ref {ref.ref} -> commit {ref.sha}")
        commit = await self.client.get_commit(ref.sha)
        tree = await self.client.get_tree(commit.tree_sha)
        
        if tree.truncated:
            logger.warning(f"Tree {tree.sha} was truncated by the API, some notes may be missing")
        return tree
    
    async def iter_notes(self, tree: Tree) -> AsyncIterator[Note]:
        """Fetch and decode each blob entry of the tree, in order."""
        skipped = [e.path for e in tree.entries if not e.is_blob]
        if skipped:
            logger.debug(f"Skipping non-blob entries: {', '.join(skipped)}")
        
        for entry in tree.blobs():
            blob = await self.client.get_blob(entry.sha)
            yield Note.from_blob(entry, blob)


async def run_notes(
    config: Config,
    out: Console = console,
    err: Console = err_console,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> bool:
    """
    Entry point for the notes report.
    
    Returns False when no notes ref was found. Failures propagate as
    GitNotesError.
    """
    async with GitHubClient(config, transport=transport) as client:
        reader = NotesReader(client, config.notes_ref)
        
        tree = await reader.fetch_notes_tree()
        if tree is None:
            err.print(f"No notes ref found for {config.notes_ref}", markup=False)
            return False
        
        out.print("Git Notes:")
        out.print("----------")
        
        # Written straight to the stream: Console.print expands tabs and drops \r
        async for note in reader.iter_notes(tree):
            out.file.write(f"\nCommit: {note.path}\n{note.text}\n")
        
        return True
