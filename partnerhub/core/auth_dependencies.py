# partnerhub/core/auth_dependencies.py

from fastapi import Depends, HTTPException, status, Request
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from partnerhub.api.accounts.models.model_user import UserModel
from partnerhub.api.accounts.repositories.repo_users import UserRepository
from partnerhub.config.settings import ADMIN_EMAILS
from partnerhub.core.security import decode_access_token
from partnerhub.database.db_connection import get_db
from partnerhub.utils.logger import logger

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Not authenticated",
    headers={"WWW-Authenticate": "Bearer"},
)

forbidden_exception = HTTPException(
    status_code=status.HTTP_403_FORBIDDEN,
    detail="You do not have permission to access this resource",
)


def _provision_user(db: Session, claims: dict) -> UserModel:
    """
    Busca o usuário local pelo `sub` do token; cria no primeiro acesso.
    """
    repo = UserRepository(db)
    external_id = str(claims["sub"])
    email = claims.get("email")
    name = claims.get("name")

    user = repo.get_by_external_id(external_id)
    if user:
        return repo.update_profile(user, email, name)

    is_admin = bool(email) and email.lower() in ADMIN_EMAILS
    try:
        user = repo.create(external_id, email, name, is_admin)
    except IntegrityError:
        # Dois requests simultâneos do mesmo usuário no primeiro acesso
        db.rollback()
        user = repo.get_by_external_id(external_id)
        if not user:
            raise
    logger.info(f"[AUTH] Usuário provisionado: id={user.id} external_id={external_id}")
    return user


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> UserModel:
    """
    Recupera o usuário autenticado a partir do header Authorization (Bearer <token>).
    """
    # 1. Pega o token do header Authorization
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        logger.warning("[AUTH] Cabeçalho Authorization ausente ou malformado.")
        raise credentials_exception

    access_token = auth_header.replace("Bearer ", "", 1)

    # 2. Decodifica o JWT
    try:
        claims = decode_access_token(access_token)
    except JWTError as e:
        logger.warning(f"[AUTH] Erro ao decodificar JWT: {e}")
        raise credentials_exception

    if not claims.get("sub"):
        raise credentials_exception

    # 3. Busca (ou provisiona) o usuário no banco
    return _provision_user(db, claims)


def require_admin(current_user: UserModel = Depends(get_current_user)) -> UserModel:
    """
    Atalho para rotas que só podem ser acessadas por administradores.
    """
    if not current_user.is_admin:
        logger.warning(f"[AUTH] Acesso negado. user_id={current_user.id} tentou acessar rota admin.")
        raise forbidden_exception
    return current_user
