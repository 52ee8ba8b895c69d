"""Demo user directory.

Users live in process memory and are reset on restart. Passwords are stored
as SHA-256 digests; this is a demo login, not an authentication system.
"""
import hashlib
import hmac
import threading
from typing import Any, Dict, List, Optional

DEMO_USERS: List[Dict[str, Any]] = [
    {
        "email": "farmer@example.com",
        "password": "password",
        "role": "farmer",
        "name": "John Farmer",
        "location": "California",
        "land_size": 50,
    },
    {
        "email": "agronomist@example.com",
        "password": "password",
        "role": "agronomist",
        "name": "Dr. Sarah Green",
        "location": "Iowa",
        "land_size": 0,
    },
]


def hash_password(password: str) -> str:
    """Hash a password using SHA256"""
    return hashlib.sha256(password.encode()).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    return hmac.compare_digest(hash_password(password), password_hash)


class UserDirectory:
    """In-memory user list with sequential ids"""

    def __init__(self):
        self._users: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    @classmethod
    def with_demo_users(cls) -> "UserDirectory":
        directory = cls()
        for user in DEMO_USERS:
            directory.add(**user)
        return directory

    @staticmethod
    def public(user: Dict[str, Any]) -> Dict[str, Any]:
        """User record without the password hash"""
        return {key: value for key, value in user.items() if key != "password_hash"}

    def find(self, email: str) -> Optional[Dict[str, Any]]:
        return next((u for u in self._users if u["email"] == email), None)

    def add(
        self,
        email: str,
        password: str,
        role: str,
        name: str,
        location: Optional[str] = None,
        land_size: float = 0,
    ) -> Optional[Dict[str, Any]]:
        """Register a user; returns None when the email is already taken"""
        with self._lock:
            if self.find(email):
                return None
            user = {
                "id": len(self._users) + 1,
                "email": email,
                "password_hash": hash_password(password),
                "role": role,
                "name": name,
                "location": location,
                "land_size": land_size or 0,
            }
            self._users.append(user)
        return user

    def authenticate(self, email: str, password: str) -> Optional[Dict[str, Any]]:
        user = self.find(email)
        if user and verify_password(password, user["password_hash"]):
            return user
        return None

    def __len__(self) -> int:
        return len(self._users)
