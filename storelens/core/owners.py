from typing import Dict, Iterable, Mapping, Optional

from storelens.core.records import Owner


class OwnerDirectory:
    """
    Resolves owner ids to display names.

    Lookup order: known-owner table, user records, then the local part
    of the id (``kim@example.com`` -> ``kim``). The funnel view builds one
    from user records only, the heatmap view from the configured table only.
    """

    def __init__(
        self,
        known_names: Optional[Mapping[str, str]] = None,
        users: Iterable[Owner] = (),
    ):
        self._known: Dict[str, str] = dict(known_names or {})
        self._users: Dict[str, str] = {
            u.owner_id: u.name for u in users if u.owner_id and u.name
        }

    def name_of(self, owner_id: str) -> str:
        if owner_id in self._known:
            return self._known[owner_id]
        if owner_id in self._users:
            return self._users[owner_id]
        return owner_id.split("@")[0]

    __call__ = name_of
