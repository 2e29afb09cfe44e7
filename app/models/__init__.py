from .user import User
from .photo import Photo
from .auth_session import AuthSession
from .swipe import Swipe, SwipeDirection
from .match import Match
from .message import Message
