from typing import Optional

from fastapi import Depends, Header

from linkscrap.core.config import Settings, get_settings


def get_user_id(
    x_user_id: Optional[str] = Header(None),
    cfg: Settings = Depends(get_settings),
) -> str:
    """Owning user for collected rows; falls back to the configured default."""
    return (x_user_id or "").strip() or cfg.default_user_id
