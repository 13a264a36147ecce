"""Async client for optional design-file enrichment.

Fetches the remote design file referenced by a candidate's ``design_url``
(Figma REST API, ``GET /files/{key}``) and condenses it into a
``DesignEnrichment``.  The public ``fetch`` method never raises: every
failure is reported through ``EnrichmentResult.error`` so customisation can
carry on without the extra data.

Typical usage::

    client = DesignEnrichmentClient(access_token="...")
    result = await client.fetch(candidate)
    if result.success:
        print(result.enrichment.frames)
"""

from __future__ import annotations

import re
import time
from typing import Any, Optional

import httpx
from pydantic import BaseModel, Field

from premiumgen.config import EnrichmentConfig
from premiumgen.selector.models import Candidate, DesignEnrichment, EnrichmentFailure

_FILE_KEY_RE = re.compile(r"/(?:file|design)/([A-Za-z0-9_-]+)")


class EnrichmentResult(BaseModel):
    """Outcome of one enrichment attempt."""

    success: bool = Field(default=True)
    enrichment: Optional[DesignEnrichment] = Field(default=None)
    error: Optional[str] = Field(default=None, description="Error message on failure")
    duration_ms: float = Field(default=0.0)


class DesignEnrichmentClient:
    """Fetches design files over HTTP with ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str = "https://api.figma.com/v1",
        access_token: Optional[str] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: EnrichmentConfig) -> "DesignEnrichmentClient":
        return cls(
            base_url=config.api_url,
            access_token=config.access_token,
            timeout=config.timeout,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            headers={"X-Figma-Token": self.access_token or ""},
        )

    @staticmethod
    def extract_file_key(design_url: str) -> str:
        """Pull the file key out of a design URL.

        Raises:
            EnrichmentFailure: If the URL carries no file key.
        """
        match = _FILE_KEY_RE.search(design_url)
        if not match:
            raise EnrichmentFailure(f"Invalid design URL format: {design_url}")
        return match.group(1)

    @staticmethod
    def _count_nodes(node: dict[str, Any]) -> int:
        return 1 + sum(
            DesignEnrichmentClient._count_nodes(child) for child in node.get("children", [])
        )

    @classmethod
    def _parse_file(cls, file_key: str, data: dict[str, Any]) -> DesignEnrichment:
        """Condense a ``/files/{key}`` response.

        Only the first page is inspected; its direct children are the frames.
        """
        document = data.get("document") or {}
        pages = document.get("children") or []
        if not pages:
            raise EnrichmentFailure(f"Design file {file_key} has no pages")

        first_page = pages[0]
        frames = tuple(
            child.get("name", "") for child in first_page.get("children", []) if child.get("name")
        )
        return DesignEnrichment(
            file_key=file_key,
            name=data.get("name", "Design file"),
            frames=frames,
            node_count=cls._count_nodes(first_page),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch(self, candidate: Candidate) -> EnrichmentResult:
        """Fetch and condense the design file for *candidate*."""
        if not candidate.design_url:
            return EnrichmentResult(
                success=False, error=f"Candidate {candidate.id} has no design URL."
            )
        if not self.access_token:
            return EnrichmentResult(
                success=False, error="No design API access token configured."
            )

        start = time.monotonic()
        try:
            file_key = self.extract_file_key(candidate.design_url)
            async with self._client() as client:
                response = await client.get(f"/files/{file_key}")
                response.raise_for_status()
                enrichment = self._parse_file(file_key, response.json())
            return EnrichmentResult(
                success=True,
                enrichment=enrichment,
                duration_ms=(time.monotonic() - start) * 1000.0,
            )
        except EnrichmentFailure as exc:
            return EnrichmentResult(success=False, error=str(exc))
        except httpx.ConnectError:
            return EnrichmentResult(
                success=False, error=f"Cannot connect to design API at {self.base_url}."
            )
        except httpx.TimeoutException:
            return EnrichmentResult(
                success=False, error=f"Design API request timed out after {self.timeout}s."
            )
        except httpx.HTTPStatusError as exc:
            return EnrichmentResult(
                success=False,
                error=f"Design API returned HTTP {exc.response.status_code}: "
                f"{exc.response.text[:200]}",
            )
        except Exception as exc:  # noqa: BLE001
            return EnrichmentResult(
                success=False, error=f"Unexpected error during enrichment: {exc}"
            )
