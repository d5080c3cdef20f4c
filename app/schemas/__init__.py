from app.schemas.auth import SetupRequest, Token, UserCreate, UserLogin, UserResponse
from app.schemas.poll import PollCreate, PollResponse, PollUpdate, SubmissionCreate, SubmissionResponse
from app.schemas.booking import BookingRequest, BookingResponse, VenueCreate, VenueResponse, VenueUpdate
from app.schemas.site_settings import SiteSettingsResponse, SiteSettingsUpdate
from app.schemas.backup import BackupDocument, ImportSummary
