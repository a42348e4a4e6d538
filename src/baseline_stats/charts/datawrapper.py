"""Client for publishing report tables to Datawrapper charts."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol

import requests


LOGGER = logging.getLogger(__name__)


class ResponseProtocol(Protocol):
    """Protocol describing the subset of ``requests.Response`` that we use."""

    status_code: int
    headers: Mapping[str, str]
    content: bytes


class TransportProtocol(Protocol):
    """Protocol describing the transport used by :class:`DatawrapperClient`."""

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: bytes | None = None,
        params: Mapping[str, Any] | None = None,
        timeout: float | tuple[float, float] | None = None,
    ) -> ResponseProtocol:  # pragma: no cover - interface declaration
        """Perform an HTTP request and return a response object."""


class ChartPublishError(RuntimeError):
    """Raised when the Datawrapper API rejects a request."""


def load_api_token(
    token_path: str | os.PathLike[str] | None,
    *,
    env_var: str | None = "DATAWRAPPER_TOKEN",
) -> str | None:
    """Return the API token from ``env_var`` or the token file, if any."""

    if env_var:
        token = os.getenv(env_var, "").strip()
        if token:
            return token

    if token_path is None:
        return None
    path = Path(token_path).expanduser()
    if not path.is_file():
        return None
    token = path.read_text(encoding="utf-8").strip()
    return token or None


class DatawrapperClient:
    """HTTP client wrapping the chart endpoints of the Datawrapper API."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = "https://api.datawrapper.de/v3",
        timeout: float = 30.0,
        transport: TransportProtocol | None = None,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        if not token:
            raise ValueError("A Datawrapper API token is required.")
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._headers = {"Authorization": f"Bearer {token}"}
        self._max_retries = max(1, max_retries)
        self._backoff_factor = backoff_factor
        self._sleep = sleep or time.sleep
        self._session: requests.Session | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def upload_data(self, chart_id: str, csv_text: str) -> None:
        """Replace the data of ``chart_id`` with ``csv_text``."""

        self._request(
            "PUT",
            f"charts/{chart_id}/data",
            step="upload data",
            headers={"Content-Type": "text/csv; charset=utf-8"},
            data=csv_text.encode("utf-8"),
        )

    def publish(self, chart_id: str) -> None:
        """Publish the current version of ``chart_id``."""

        self._request("POST", f"charts/{chart_id}/publish", step="publish")

    def export_png(self, chart_id: str, destination: str | Path) -> Path:
        """Download the rendered PNG of ``chart_id`` to ``destination``."""

        response = self._request(
            "GET",
            f"charts/{chart_id}/export/png",
            step="export image",
            headers={"Accept": "image/png"},
        )
        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(response.content)
        return path

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        step: str,
        headers: Mapping[str, str] | None = None,
        data: bytes | None = None,
    ) -> ResponseProtocol:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        transport = self._transport or self._get_session()
        request_headers = {**self._headers, **(headers or {})}

        for attempt in range(self._max_retries):
            try:
                response = transport.request(
                    method,
                    url,
                    headers=request_headers,
                    data=data,
                    timeout=self._timeout,
                )
            except requests.RequestException as exc:
                raise ChartPublishError(f"Could not {step} for '{endpoint}': {exc}") from exc

            status = response.status_code
            if status == 429 or 500 <= status < 600:
                if attempt >= self._max_retries - 1:
                    break
                retry_after = _retry_after_seconds(response.headers)
                self._sleep(retry_after or self._compute_backoff(attempt))
                continue

            if status >= 400:
                raise ChartPublishError(
                    f"Datawrapper returned status {status} trying to {step} for '{endpoint}'."
                )
            return response

        raise ChartPublishError(
            f"Datawrapper failed after {self._max_retries} attempts trying to {step} "
            f"for '{endpoint}'."
        )

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def _compute_backoff(self, attempt: int) -> float:
        delay = self._backoff_factor * (2 ** attempt)
        return max(0.1, delay)


def _retry_after_seconds(headers: Mapping[str, str] | None) -> float | None:
    if not headers:
        return None

    retry_after = headers.get("Retry-After")
    if retry_after is None:
        return None

    try:
        return float(retry_after)
    except ValueError:
        return None


def publish_reports(
    client: DatawrapperClient,
    reports: Mapping[str, str],
    chart_ids: Mapping[str, str],
    *,
    image_dir: str | Path,
    best_effort: bool = False,
) -> dict[str, Path]:
    """Upload, publish and export the chart of every report with a chart id.

    ``reports`` maps report names to their rendered text. Returns the paths
    of the exported images. Failures raise :class:`ChartPublishError` unless
    ``best_effort`` is set, in which case they are logged and skipped.
    """

    images: dict[str, Path] = {}
    directory = Path(image_dir)
    for name, content in reports.items():
        chart_id = chart_ids.get(name)
        if not chart_id:
            LOGGER.debug("No chart configured for %s", name)
            continue

        LOGGER.info("Publishing %s to chart %s", name, chart_id)
        try:
            client.upload_data(chart_id, content)
            client.publish(chart_id)
            images[name] = client.export_png(chart_id, directory / f"{name}.png")
        except ChartPublishError as exc:
            if not best_effort:
                raise
            LOGGER.warning("Skipping chart for %s: %s", name, exc)
            continue
        LOGGER.info("Exported %s", images[name])

    return images


__all__ = [
    "ChartPublishError",
    "DatawrapperClient",
    "load_api_token",
    "publish_reports",
]
