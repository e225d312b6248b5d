from slugconnect.schemas.auth import AuthResponse, ConfirmEmailRequest, LoginRequest, MessageResponse, ResendConfirmationRequest, SignUpRequest, SignUpResponse
from slugconnect.schemas.catalog import CatalogResponse
from slugconnect.schemas.connection import (
	AcceptedConnectionItem,
	ConnectionRequestRead,
	ConnectionsOverview,
	ConnectionStatus,
	ConnectionStatusRead,
	PendingRequestItem,
	RespondRequest,
	SendRequest,
)
from slugconnect.schemas.discover import DiscoverProfile, DiscoverResponse, ProfileFilter
from slugconnect.schemas.profile import InterestRequest, MyProfileResponse, OnboardingRequest, ProfileRead, ProfileUpdate
from slugconnect.schemas.user import SessionRead, TokenData, UserRead

__all__ = [
	"AuthResponse",
	"ConfirmEmailRequest",
	"LoginRequest",
	"MessageResponse",
	"ResendConfirmationRequest",
	"SignUpRequest",
	"SignUpResponse",
	"CatalogResponse",
	"AcceptedConnectionItem",
	"ConnectionRequestRead",
	"ConnectionsOverview",
	"ConnectionStatus",
	"ConnectionStatusRead",
	"PendingRequestItem",
	"RespondRequest",
	"SendRequest",
	"DiscoverProfile",
	"DiscoverResponse",
	"ProfileFilter",
	"InterestRequest",
	"MyProfileResponse",
	"OnboardingRequest",
	"ProfileRead",
	"ProfileUpdate",
	"SessionRead",
	"TokenData",
	"UserRead",
]
