from __future__ import annotations

__all__ = ["IDs", "sort_button_id"]


class IDs:
    class Store:
        VIEW_CONFIG = "view-config"

    class Control:
        # Query + sort
        SEARCH_INPUT = "search-input"

        # Listing
        RESULTS_TABLE_BODY = "results-table-body"
        RESULT_SUMMARY = "result-summary"
        LOADING_INDICATOR = "loading-indicator"

        # Reveal machinery: hidden trigger clicked by assets/near_end.js,
        # one-shot interval standing in for the settling delay
        NEAR_END_TRIGGER = "near-end-trigger"
        SETTLE_TIMER = "settle-timer"

        # Downloads
        DOWNLOAD_CSV = "download-csv"
        DOWNLOAD_CSV_BTN = "download-csv-btn"

    class Pattern:
        # pattern-matching "type" strings
        SORT_BUTTON = "sort-button"


def sort_button_id(key: str) -> dict:
    return {"type": IDs.Pattern.SORT_BUTTON, "index": key}
