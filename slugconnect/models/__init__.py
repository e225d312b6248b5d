from slugconnect.models.connection_request import ConnectionRequest
from slugconnect.models.profile import Profile
from slugconnect.models.revoked_token import RevokedToken
from slugconnect.models.user import User

__all__ = [
	"ConnectionRequest",
	"Profile",
	"RevokedToken",
	"User",
]
