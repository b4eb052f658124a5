# linkscrap/services/brightdata.py
import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from linkscrap.core.config import Settings, settings as default_settings
from linkscrap.core.errors import BrightDataError, ConfigurationError

logger = logging.getLogger(__name__)


def _preview(data: Any, limit: int = 2000) -> str:
    try:
        text = json.dumps(data, default=str)
    except (TypeError, ValueError):
        text = repr(data)
    return text if len(text) <= limit else text[:limit] + "..."


class BrightDataClient:
    """Thin synchronous wrapper over the BrightData datasets v3 API.

    ``trigger`` starts a collection, ``monitor_progress`` reads a snapshot's
    status and ``download_snapshot`` fetches the finished dataset. Every
    transport or HTTP failure is raised as :class:`BrightDataError`; missing
    credentials raise :class:`ConfigurationError` before any request is made.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        api_root: Optional[str] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or "").rstrip("/")
        self.api_root = (api_root or self.base_url.replace("/trigger", "")).rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, cfg: Optional[Settings] = None, transport: Optional[httpx.BaseTransport] = None) -> "BrightDataClient":
        cfg = cfg or default_settings
        return cls(
            api_key=cfg.brightdata_api_key,
            base_url=cfg.brightdata_base_url,
            api_root=cfg.brightdata_api_root,
            timeout=cfg.brightdata_timeout,
            transport=transport,
        )

    def _require_config(self, need_base_url: bool = True) -> None:
        if not self.api_key:
            raise ConfigurationError("BrightData API key is missing")
        if need_base_url and not self.base_url:
            raise ConfigurationError("BrightData base URL is missing")

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.timeout,
            headers={"Authorization": f"Bearer {self.api_key}"},
            transport=self.transport,
        )

    def _request(self, method: str, url: str, action: str, **kwargs) -> Any:
        try:
            with self._client() as client_http:
                r = client_http.request(method, url, **kwargs)
                r.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("BrightData %s failed: HTTP %s %s", action, status, e.response.text[:2000])
            raise BrightDataError(
                f"Failed to {action}: HTTP {status}",
                upstream_status=status,
                transient=status == 429 or status >= 500,
            ) from e
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            logger.error("BrightData %s failed: %s", action, e)
            raise BrightDataError(f"Failed to {action}: {e}", transient=True) from e
        except httpx.HTTPError as e:
            logger.error("BrightData %s failed: %s", action, e)
            raise BrightDataError(f"Failed to {action}: {e}") from e

        logger.debug("BrightData %s -> %s", action, r.status_code)
        try:
            return r.json()
        except ValueError:
            # callers treat non-JSON bodies as an unexpected shape
            return r.text

    def trigger(
        self,
        dataset_id: str,
        payload: List[Dict[str, Any]],
        type: Optional[str] = None,
        discover_by: Optional[str] = None,
    ) -> Any:
        self._require_config()
        if not dataset_id:
            raise ConfigurationError("BrightData dataset ID is not configured")

        params = {"dataset_id": dataset_id, "include_errors": "true"}
        if type:
            params["type"] = type
        if discover_by:
            params["discover_by"] = discover_by

        logger.info("Triggering BrightData dataset %s with %d items (discover_by=%s)", dataset_id, len(payload), discover_by)
        logger.debug("Trigger payload: %s", _preview(payload))
        data = self._request(
            "POST",
            self.base_url,
            "trigger BrightData collection",
            params=params,
            json=payload,
        )
        logger.debug("Trigger response: %s", _preview(data))
        return data

    def monitor_progress(self, snapshot_id: str) -> Dict[str, Any]:
        self._require_config(need_base_url=False)
        data = self._request(
            "GET",
            f"{self.api_root}/progress/{snapshot_id}",
            "monitor snapshot progress",
        )
        if not isinstance(data, dict):
            raise BrightDataError(f"Unexpected progress response for snapshot {snapshot_id}")
        logger.debug("Progress for %s: %s", snapshot_id, _preview(data))
        return data

    def download_snapshot(self, snapshot_id: str, format: str = "json") -> Any:
        self._require_config(need_base_url=False)
        logger.info("Downloading snapshot %s", snapshot_id)
        data = self._request(
            "GET",
            f"{self.api_root}/snapshot/{snapshot_id}",
            "download snapshot",
            params={"format": format},
        )
        logger.debug("Snapshot %s payload: %s", snapshot_id, _preview(data))
        return data


def get_brightdata() -> BrightDataClient:
    return BrightDataClient.from_settings()
