"""Error types shared by the BrightData client, the snapshot helpers and the API."""


class LinkscrapError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(LinkscrapError):
    """Missing dataset id or provider credentials. Never retried."""

    status_code = 500


class BrightDataError(LinkscrapError):
    """The provider answered with an error or could not be reached."""

    status_code = 502

    def __init__(self, message: str, upstream_status: int = None, transient: bool = False):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.transient = transient


class SnapshotFailedError(LinkscrapError):
    status_code = 502

    def __init__(self, snapshot_id: str, status: str):
        super().__init__(f"BrightData collection failed with status: {status}")
        self.snapshot_id = snapshot_id
        self.status = status


class SnapshotTimeoutError(LinkscrapError):
    status_code = 504

    def __init__(self, snapshot_id: str, max_wait: float):
        super().__init__(
            f"Timeout: Data collection did not complete within {int(max_wait)} seconds"
        )
        self.snapshot_id = snapshot_id
        self.max_wait = max_wait
