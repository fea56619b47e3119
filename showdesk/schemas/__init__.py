
from showdesk.schemas.common import ErrorResponse, CurrentUser
from showdesk.schemas.show import (
    Show, ShowCreate, ShowUpdate, ShowWithStatus, ShowSummary,
    ShowImage, ShowImageUpdate, CropRequest,
)
from showdesk.schemas.dashboard import SeasonDashboard, SeasonInfo, StatusBucket, GenreCount
from showdesk.schemas.setting import Setting, SettingUpdate, SortOrder, SortOrderUpdate, SortOrderMove
from showdesk.schemas.ai import OptimizeTextRequest, OptimizeTextResponse, AltTextRequest, AltTextResponse
