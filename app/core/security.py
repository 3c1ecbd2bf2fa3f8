"""
Utilidades de seguridad: tokens de sesion del dashboard.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt

from app.core.config import settings
from app.shared.exceptions.auth import InvalidCredentialsException, TokenExpiredException


class SecurityService:
    """Servicio para emitir y validar tokens de sesion."""

    def __init__(self, secret_key: str, algorithm: str, expire_minutes: int) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def create_access_token(
        self,
        session_id: str,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Crea un token JWT cuyo `sub` es el ID de la sesion.

        Args:
            session_id: ID de la sesion abierta en el login
            expires_delta: Tiempo de expiración personalizado

        Returns:
            str: Token JWT codificado
        """
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=self._expire_minutes)
        )
        to_encode = {"sub": session_id, "exp": expire}
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def decode_access_token(self, token: str) -> Dict[str, Any]:
        """
        Decodifica y valida un token JWT.

        Args:
            token: Token JWT a decodificar

        Returns:
            Dict[str, Any]: Datos del token decodificado

        Raises:
            InvalidCredentialsException: Si el token es inválido
            TokenExpiredException: Si el token ha expirado
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm]
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredException()
        except JWTError:
            raise InvalidCredentialsException()

        if not payload.get("sub"):
            raise InvalidCredentialsException()
        return payload

    def session_id_from_token(self, token: str) -> str:
        return self.decode_access_token(token)["sub"]


# Instancia global del servicio de seguridad
security_service = SecurityService(
    secret_key=settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
)
