from __future__ import annotations

from dataclasses import dataclass

from rich.style import Style


@dataclass(frozen=True)
class Palette:
    """Styles used when rendering pull requests.

    Attributes:
        ready_id: Number of a PR that is ready for review.
        draft_id: Number of a draft PR.
        branch: Head branch name.
        created: Relative creation time.
        header: Column labels.
    """

    ready_id: Style = Style(color="color(2)")
    draft_id: Style = Style(color="color(3)")
    branch: Style = Style(color="color(6)")
    created: Style = Style(color="color(8)")
    header: Style = Style(color="color(7)", underline=True)

    @classmethod
    def plain(cls) -> Palette:
        """Return a palette that applies no styling."""
        null = Style.null()
        return cls(ready_id=null, draft_id=null, branch=null, created=null, header=null)

    def id_style(self, is_draft: bool) -> Style:
        return self.draft_id if is_draft else self.ready_id
