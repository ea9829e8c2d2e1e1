# partnerhub/core/security.py
from datetime import datetime, timedelta, timezone

from jose import jwt

from partnerhub.config.settings import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES, JWT_AUDIENCE

# Validação de SECRET_KEY
if not SECRET_KEY or not isinstance(SECRET_KEY, str):
    raise RuntimeError("SECRET_KEY não configurada. Defina SECRET_KEY no .env ou variáveis de ambiente.")


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """
    Emite um JWT no mesmo formato do provedor de identidade.

    Usado por ferramentas internas e testes; em produção os tokens vêm do provedor.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({
        "exp": expire,
        # garante que sempre é string:
        "sub": str(to_encode.get("sub", "")),
    })
    if JWT_AUDIENCE and "aud" not in to_encode:
        to_encode["aud"] = JWT_AUDIENCE
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decodifica e valida o JWT. Levanta JWTError se inválido ou expirado."""
    options = {"verify_aud": bool(JWT_AUDIENCE)}
    return jwt.decode(
        token,
        SECRET_KEY,
        algorithms=[ALGORITHM],
        audience=JWT_AUDIENCE,
        options=options,
    )
