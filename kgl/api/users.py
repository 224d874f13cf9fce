import logging

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from kgl.core.errors import AuthError, AuthorizationError
from kgl.db.session import get_db
from kgl.db.repository import Repository
from kgl.models.user import User as UserModel
from kgl.schemas.user import (
    User as UserSchema,
    UserCreate,
    UserUpdate,
    UserEnvelope,
    UserList,
    LoginRequest,
    LoginResponse,
    Token,
    TokenData,
)
from kgl.auth.security import (
    create_access_token,
    get_current_user,
    get_password_hash,
    is_manager,
    verify_password,
)

logger = logging.getLogger("kgl.users")

router = APIRouter()


def get_repository(db: Session = Depends(get_db)) -> Repository:
    return Repository(db, UserModel, "user")


def _authenticate(db: Session, email: str, password: str) -> UserModel:
    user = db.query(UserModel).filter(UserModel.email == email).order_by(UserModel.id).first()
    if user is None:
        logger.info("Login failed: no user for %s", email)
        raise AuthError("User does not exist", f"No account is registered for {email}")
    if not verify_password(password, user.hashed_password):
        logger.info("Login failed: bad password for user %s", user.id)
        raise AuthError("Invalid credentials", "Password does not match")
    if user.status != "Active":
        logger.info("Login refused: user %s is inactive", user.id)
        raise AuthorizationError("Account is inactive", "Only Active accounts may log in")
    return user


# --------------------------------------------------------------------
# Register (public) -> POST /users/register
# --------------------------------------------------------------------
@router.post("/register", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
def register_user(user_data: UserCreate, repo: Repository = Depends(get_repository)):
    fields = user_data.model_dump(exclude={"password"})
    # Hash first: nothing is stored if hashing fails
    fields["hashed_password"] = get_password_hash(user_data.password)
    db_user = repo.create(fields)
    return {"message": "User registered successfully", "user": UserSchema.model_validate(db_user)}

# --------------------------------------------------------------------
# Login with email + password (public) -> POST /users/login
# --------------------------------------------------------------------
@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    user = _authenticate(db, credentials.email, credentials.password)
    token = create_access_token(user_id=user.id, role=user.role)
    return {"message": "Login successful", "token": token}

# --------------------------------------------------------------------
# TOKEN-ONLY: OAuth2 form login for the interactive docs -> POST /users/token
# --------------------------------------------------------------------
@router.post("/token", response_model=Token)
def login_token_only(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    # The form field is called username but carries the email
    user = _authenticate(db, form_data.username, form_data.password)
    token = create_access_token(user_id=user.id, role=user.role)
    return {"access_token": token, "token_type": "bearer"}

# --------------------------------------------------------------------
# All users (any logged in user) -> GET /users
# --------------------------------------------------------------------
@router.get("", response_model=UserList)
def read_users(
    repo: Repository = Depends(get_repository),
    current_user: TokenData = Depends(get_current_user)
):
    users = repo.list_all()
    return {"message": "users successfully fetched", "users": [UserSchema.model_validate(u) for u in users]}

# --------------------------------------------------------------------
# Current user -> GET /users/me
# --------------------------------------------------------------------
@router.get("/me", response_model=UserEnvelope)
def read_user_me(
    repo: Repository = Depends(get_repository),
    current_user: TokenData = Depends(get_current_user)
):
    db_user = repo.get(current_user.user_id)
    return {"message": "User found successfully", "user": UserSchema.model_validate(db_user)}

# --------------------------------------------------------------------
# Get user by ID (any logged in user) -> GET /users/{id}
# --------------------------------------------------------------------
@router.get("/{record_id}", response_model=UserEnvelope)
def read_user(
    record_id: str,
    repo: Repository = Depends(get_repository),
    current_user: TokenData = Depends(get_current_user)
):
    db_user = repo.get(record_id)
    return {"message": "User found successfully", "user": UserSchema.model_validate(db_user)}

# --------------------------------------------------------------------
# Update user (Manager only) -> PATCH /users/{id}
# --------------------------------------------------------------------
@router.patch("/{record_id}", response_model=UserEnvelope)
def update_user(
    record_id: str,
    user: UserUpdate,
    repo: Repository = Depends(get_repository),
    current_user: TokenData = Depends(is_manager)
):
    update_data = user.changes()

    if "password" in update_data:
        update_data["hashed_password"] = get_password_hash(update_data.pop("password"))

    db_user = repo.update(record_id, update_data)
    return {"message": "User updated successfully", "user": UserSchema.model_validate(db_user)}

# --------------------------------------------------------------------
# Delete user (Manager only) -> DELETE /users/{id}
# --------------------------------------------------------------------
@router.delete("/{record_id}", response_model=UserEnvelope)
def delete_user(
    record_id: str,
    repo: Repository = Depends(get_repository),
    current_user: TokenData = Depends(is_manager)
):
    db_user = repo.delete(record_id)
    return {"message": "User deleted successfully", "user": UserSchema.model_validate(db_user)}
