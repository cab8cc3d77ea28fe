DEFAULT_CONFIG = {
    # -----------------------------
    # STORE STATUS GROUPS
    # -----------------------------
    "statuses": {
        "fully_installed": "QR_MENU_INSTALL",
        "install_completed": [
            "QR_MENU_INSTALL",
            "SERVICE_TERMINATED",
            "UNUSED_TERMINATED",
            "DEFECT_REPAIR",
        ],
        "churned_service": "SERVICE_TERMINATED",
        "churned_unused": "UNUSED_TERMINATED",
        "repair": "DEFECT_REPAIR",
        "pending": "PENDING",
    },

    # -----------------------------
    # KNOWN OWNER DISPLAY NAMES
    # -----------------------------
    # owner_id -> name for heatmap owners, anything
    # missing falls back to the local part of the id
    "owners": {
        "unassigned": "Unassigned",
    },

    # -----------------------------
    # DATA SOURCE
    # -----------------------------
    "source": {
        "type": "files",
        "path": "data",
        "page_size": 500,
    },

    # -----------------------------
    # VIEWS
    # -----------------------------
    "heatmap": {
        "default_days": 14,
    },
    "cohort": {
        "recent_months": 6,
    },

    # -----------------------------
    # OUTPUT CONTROL
    # -----------------------------
    "output_dir": "runs",
}
