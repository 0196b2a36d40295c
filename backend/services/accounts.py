import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.users import User
from schemas.user import UserRegister
from utils.errors import EmailTaken, InvalidCredentials, NotFoundError
from utils.hashing import get_password_hash, verify_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AccountStore:
    def __init__(self, db: Session):
        self.db = db

    def _find_by_email(self, email: str):
        return self.db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()

    def register(self, profile: UserRegister) -> int:
        """Create a customer account and return its id."""
        email = normalize_email(profile.email)
        if self._find_by_email(email):
            raise EmailTaken("El email ya está registrado")

        user = User(
            nombre=profile.nombre.strip(),
            email=email,
            telefono=profile.telefono,
            password_hash=get_password_hash(profile.password),
            direccion=profile.direccion,
            ciudad=profile.ciudad,
            tipo_cliente=profile.tipo_cliente,
            activo=True,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration with the same email
            self.db.rollback()
            raise EmailTaken("El email ya está registrado")
        self.db.refresh(user)
        logger.info("Registered account %s (%s)", user.id, user.tipo_cliente)
        return user.id

    def authenticate(self, email: str, password: str) -> User:
        user = self._find_by_email(email)
        # Same answer for unknown email, wrong password and disabled account
        if not user or not user.activo or not verify_password(password, user.password_hash):
            raise InvalidCredentials("Email o contraseña incorrectos")
        return user

    def get_profile(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError("Usuario no encontrado")
        return user
