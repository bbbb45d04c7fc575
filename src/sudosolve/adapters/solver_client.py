"""HTTP client for the Sudoku solving backend."""

from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from sudosolve.domain.errors import SolveError
from sudosolve.domain.images import ImageRef
from sudosolve.domain.solve import SolveResponse
from sudosolve.services.solver import SolverClient


@dataclass
class HttpxSolverClient(SolverClient):
    """Solver client that posts images to the backend with httpx."""

    solver_url: str
    http_client: httpx.AsyncClient
    api_key: str | None = None
    timeout: float = 60.0

    @classmethod
    def create(
        cls, solver_url: str, api_key: str | None = None, timeout: float = 60.0
    ) -> "HttpxSolverClient":
        """Create a solver client with a managed httpx session."""
        return cls(
            solver_url=solver_url,
            http_client=httpx.AsyncClient(),
            api_key=api_key,
            timeout=timeout,
        )

    async def solve(
        self, image_bytes: bytes, *, content_type: str, filename: str
    ) -> ImageRef:
        """Upload the puzzle photo and return the solved image."""
        headers: dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        response = await self.http_client.post(
            self.solver_url,
            files={"image": (filename, image_bytes, content_type)},
            headers=headers,
            timeout=self.timeout,
        )
        media_type = response.headers.get("content-type", "").split(";")[0]
        if response.is_success and media_type.startswith("image/"):
            return ImageRef.from_bytes(response.content, media_type)

        payload = _parse_payload(response)
        if payload is not None and payload.error:
            raise SolveError(payload.error)
        response.raise_for_status()
        if payload is None or not payload.image:
            raise SolveError("The solver returned no image.")
        if payload.image.startswith("data:"):
            return ImageRef(uri=payload.image)
        return await self._fetch_image(payload.image)

    async def _fetch_image(self, url: str) -> ImageRef:
        """Download a solved image hosted by the backend."""
        response = await self.http_client.get(url, timeout=self.timeout)
        response.raise_for_status()
        media_type = response.headers.get("content-type", "").split(";")[0]
        return ImageRef.from_bytes(
            response.content, media_type if media_type.startswith("image/") else None
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _parse_payload(response: httpx.Response) -> SolveResponse | None:
    """Parse a JSON solver payload, returning None for other bodies."""
    try:
        return SolveResponse.model_validate_json(response.content)
    except ValidationError:
        return None
