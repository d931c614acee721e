"""Result values returned by the harvesting services.

Every stage reports its outcome as a plain value instead of raising, so the
pipeline can keep going after a single document fails.
"""

from typing import List, Literal, NamedTuple, Optional

Outcome = Literal["downloaded", "skipped", "failed"]

FailureKind = Literal[
    "invalid_url",
    "transport",
    "bad_status",
    "bad_content_type",
    "empty_body",
    "filesystem",
]


class FetchResult(NamedTuple):
    content: str
    ok: bool
    error: str = ""


class DownloadResult(NamedTuple):
    url: str
    path: str
    outcome: Outcome
    failure: Optional[FailureKind] = None
    detail: str = ""
    bytes_written: int = 0


class HarvestReport(NamedTuple):
    source_url: str
    links_found: List[str]
    results: List[DownloadResult]

    @property
    def downloaded(self) -> int:
        return sum(1 for r in self.results if r.outcome == "downloaded")

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.outcome == "skipped")

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.outcome == "failed")
