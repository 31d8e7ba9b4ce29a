"""
DisplaySurface — the page a report panel and rendered data are written to.

Holds an ordered list of top-of-page HTML blocks (prepend only, like a
page body receiving notices) and a registry of mount points addressed by
id.  A mount's content is replaced wholesale by whoever owns it.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field


@dataclass
class Mount:
    """A designated location whose content can be replaced."""

    mount_id: str
    html: str = ""

    def replace(self, content: str) -> None:
        self.html = content


@dataclass
class DisplaySurface:
    """In-memory page: prepended blocks followed by the mounts in order."""

    title: str = "jsonguard"
    blocks: list[str] = field(default_factory=list)
    mounts: dict[str, Mount] = field(default_factory=dict)

    def prepend(self, block: str) -> None:
        self.blocks.insert(0, block)

    def add_mount(self, mount_id: str, content: str = "") -> Mount:
        mount = Mount(mount_id=mount_id, html=content)
        self.mounts[mount_id] = mount
        return mount

    def get_mount(self, mount_id: str | None) -> Mount | None:
        if not mount_id:
            return None
        return self.mounts.get(mount_id)

    def to_html(self) -> str:
        """Serialise the whole page."""
        body = [*self.blocks]
        for mount in self.mounts.values():
            body.append(f'<div id="{html.escape(mount.mount_id)}">{mount.html}</div>')
        return (
            "<!doctype html>\n"
            '<html lang="en">\n'
            f"<head><meta charset=\"utf-8\"><title>{html.escape(self.title)}</title></head>\n"
            "<body>\n"
            + "\n".join(body)
            + "\n</body>\n</html>\n"
        )
