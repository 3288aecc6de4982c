# File: src/chainview/explorer/assets.py
from typing import Dict, Iterable, List, Mapping, Optional

from ..storage.database import LedgerStore
from ..utils.config import Config
from ..utils.logger import get_logger

logger = get_logger(__name__)


class AssetResolver:
    """Maps asset ids to display names.

    Unknown ids resolve to themselves, so a monetary amount in a response is
    always paired with either a readable name or the raw id.
    """

    def __init__(
        self,
        store: LedgerStore,
        aliases: Optional[Mapping[str, str]] = None,
        lang: str = Config.ASSET_NAME_LANG
    ):
        self.store = store
        self.aliases = dict(Config.ASSET_NAME_ALIASES if aliases is None else aliases)
        self.lang = lang

    def resolve_name(self, asset_id: str) -> str:
        return self.resolve_names([asset_id])[asset_id]

    def resolve_names(self, asset_ids: Iterable[str]) -> Dict[str, str]:
        """Resolve many ids with a single store query."""
        asset_ids = list(dict.fromkeys(asset_ids))
        names = {asset_id: asset_id for asset_id in asset_ids}
        for asset in self.store.get_assets_by_ids(asset_ids):
            name = self.display_name(asset.get('name') or [])
            if name is not None:
                names[asset['txid']] = name
        unresolved = [asset_id for asset_id in asset_ids if names[asset_id] == asset_id]
        if unresolved:
            logger.debug(f"Unresolved asset ids: {unresolved}")
        return names

    def display_name(self, names: List[dict]) -> Optional[str]:
        """Pick the preferred-language name, falling back to the first entry."""
        if not names:
            return None
        chosen = next((entry for entry in names if entry.get('lang') == self.lang), names[0])
        name = chosen.get('name')
        if not name:
            return None
        return self.aliases.get(name, name)
