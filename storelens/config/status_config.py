from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet


# -------------------------------------------------
# STORE STATUS GROUPS
# -------------------------------------------------
@dataclass(frozen=True)
class StatusGroups:
    """
    Lifecycle status vocabulary shared by the funnel,
    heatmap and cohort engines.

    Rules:
    - churned statuses are always install-completed
    - fully_installed is always install-completed
    """
    fully_installed: str = "QR_MENU_INSTALL"
    churned_service: str = "SERVICE_TERMINATED"
    churned_unused: str = "UNUSED_TERMINATED"
    repair: str = "DEFECT_REPAIR"
    pending: str = "PENDING"
    install_completed: FrozenSet[str] = field(
        default_factory=lambda: frozenset({
            "QR_MENU_INSTALL",
            "SERVICE_TERMINATED",
            "UNUSED_TERMINATED",
            "DEFECT_REPAIR",
        })
    )

    def __post_init__(self):
        # frozen dataclass, so bypass __setattr__ for the coercion
        object.__setattr__(
            self,
            "install_completed",
            frozenset(self.install_completed)
            | {self.fully_installed, self.churned_service, self.churned_unused},
        )

    @property
    def churned(self) -> FrozenSet[str]:
        return frozenset({self.churned_service, self.churned_unused})

    def is_install_completed(self, status: str) -> bool:
        return status in self.install_completed

    def is_churned(self, status: str) -> bool:
        return status in self.churned

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "StatusGroups":
        cfg = cfg or {}
        defaults = cls()

        return cls(
            fully_installed=cfg.get("fully_installed", defaults.fully_installed),
            churned_service=cfg.get("churned_service", defaults.churned_service),
            churned_unused=cfg.get("churned_unused", defaults.churned_unused),
            repair=cfg.get("repair", defaults.repair),
            pending=cfg.get("pending", defaults.pending),
            install_completed=frozenset(
                cfg.get("install_completed", defaults.install_completed)
            ),
        )
