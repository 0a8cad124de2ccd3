from __future__ import annotations

__all__ = ["IDs", "dataset_checkbox_id", "dataset_delete_id", "stage_progress_id", "stage_status_id"]


class IDs:
    class Store:
        DATASETS_REVISION = "datasets-revision"
        PENDING_DELETE = "pending-delete-id"
        ANALYSIS_RUN = "analysis-run"
        ANALYSIS_RESULT = "analysis-result"
        NOTICE = "notice"

    class Control:
        # Navigation
        PAGE_TABS = "page-tabs"
        GET_STARTED_BTN = "get-started-btn"
        NAVBAR_STORAGE_BADGE = "navbar-storage-badge"

        # Notifications (blocking modal)
        NOTICE_MODAL = "notice-modal"
        NOTICE_BODY = "notice-body"
        NOTICE_CLOSE_BTN = "notice-close-btn"

        # Datasets page
        DS_UPLOAD = "ds-upload"
        DS_UPLOAD_STATUS = "ds-upload-status"
        DS_LIST = "ds-list"
        DS_SUMMARY_TEXT = "ds-summary-text"
        DS_SELECT_ALL_BTN = "ds-select-all-btn"
        DS_ANALYZE_BTN = "ds-analyze-btn"
        DS_DELETE_CONFIRM = "ds-delete-confirm"

        # Analysis page
        ANALYSIS_INTERVAL = "analysis-interval"
        ANALYSIS_PLACEHOLDER = "analysis-placeholder"
        RESULTS_SECTION = "results-section"
        STAT_DATE_RANGE = "stat-date-range"
        STAT_AVG_GLUCOSE = "stat-avg-glucose"
        STAT_TIME_IN_RANGE = "stat-time-in-range"
        STAT_TOTAL_INSULIN = "stat-total-insulin"
        STAT_TOTAL_RECORDS = "stat-total-records"
        STAT_DAILY_INSULIN = "stat-daily-insulin"
        TIR_GRAPH = "tir-graph"
        INSIGHTS_LIST = "insights-list"
        RECOMMENDATIONS_LIST = "recommendations-list"
        EXPORT_BTN = "export-results-btn"
        DOWNLOAD_RESULT = "download-result"

        # Settings page
        API_TOKEN_INPUT = "api-token-input"
        SAVE_TOKEN_BTN = "save-token-btn"
        STORAGE_TYPE_RADIO = "storage-type-radio"
        NOTIFICATIONS_SWITCH = "notifications-switch"
        AUTO_ANALYSIS_SWITCH = "auto-analysis-switch"
        CLEAR_DATA_BTN = "clear-data-btn"
        CLEAR_DATA_CONFIRM = "clear-data-confirm"
        SETTINGS_STATUS = "settings-status"

    class Pattern:
        # pattern-matching "type" strings
        DATASET_CHECKBOX = "dataset-checkbox"
        DATASET_DELETE = "dataset-delete"


class Tab:
    HOME = "home"
    DATASETS = "datasets"
    ANALYSIS = "analysis"
    SETTINGS = "settings"


def dataset_checkbox_id(dataset_id: str) -> dict:
    return {"type": IDs.Pattern.DATASET_CHECKBOX, "index": dataset_id}


def dataset_delete_id(dataset_id: str) -> dict:
    return {"type": IDs.Pattern.DATASET_DELETE, "index": dataset_id}


def stage_progress_id(stage_key: str) -> str:
    return f"{stage_key}-progress"


def stage_status_id(stage_key: str) -> str:
    return f"{stage_key}-status"
