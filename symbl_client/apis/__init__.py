from .async_api import AsyncApi
from .bookmarks_api import BookmarksApi
from .insights_api import InsightsApi
from .summary_ui_api import SummaryUiApi

__all__ = ["AsyncApi", "BookmarksApi", "InsightsApi", "SummaryUiApi"]
