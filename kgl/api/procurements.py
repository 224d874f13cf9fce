from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kgl.db.session import get_db
from kgl.db.repository import Repository
from kgl.models.procurement import Procurement as ProcurementModel
from kgl.schemas.procurement import (
    Procurement as ProcurementSchema,
    ProcurementCreate,
    ProcurementUpdate,
    ProcurementCreated,
    ProcurementList,
    ProcurementFound,
    ProcurementUpdated,
    ProcurementDeleted,
)
from kgl.schemas.user import TokenData
from kgl.auth.security import is_manager

router = APIRouter()


def get_repository(db: Session = Depends(get_db)) -> Repository:
    return Repository(db, ProcurementModel, "procurement")


# --------------------------------------------------------------------
# Record a procurement (Manager only) -> POST /procurements
# --------------------------------------------------------------------
@router.post("", response_model=ProcurementCreated, status_code=status.HTTP_201_CREATED)
def create_procurement(
    procurement: ProcurementCreate,
    repo: Repository = Depends(get_repository),
    current_user: TokenData = Depends(is_manager)
):
    record = repo.create(procurement.model_dump())
    return {
        "message": "Procurement record created successfully",
        "createdRecord": ProcurementSchema.model_validate(record),
    }

# --------------------------------------------------------------------
# All procurements (public) -> GET /procurements
# --------------------------------------------------------------------
@router.get("", response_model=ProcurementList)
def read_procurements(repo: Repository = Depends(get_repository)):
    records = repo.list_all()
    return {
        "message": "procurement records successfully fetched",
        "AllRecords": [ProcurementSchema.model_validate(r) for r in records],
    }

# --------------------------------------------------------------------
# One procurement (public) -> GET /procurements/{id}
# --------------------------------------------------------------------
@router.get("/{record_id}", response_model=ProcurementFound)
def read_procurement(record_id: str, repo: Repository = Depends(get_repository)):
    record = repo.get(record_id)
    return {
        "message": f"procurement record with id {record.id} found successfully",
        "Record": ProcurementSchema.model_validate(record),
    }

# --------------------------------------------------------------------
# Partial update (Manager only) -> PATCH /procurements/{id}
# --------------------------------------------------------------------
@router.patch("/{record_id}", response_model=ProcurementUpdated)
def update_procurement(
    record_id: str,
    procurement: ProcurementUpdate,
    repo: Repository = Depends(get_repository),
    current_user: TokenData = Depends(is_manager)
):
    record = repo.update(record_id, procurement.changes())
    return {
        "message": f"Procurement record with id {record.id} updated successfully",
        "updatedRecord": ProcurementSchema.model_validate(record),
    }

# --------------------------------------------------------------------
# Delete (Manager only) -> DELETE /procurements/{id}
# --------------------------------------------------------------------
@router.delete("/{record_id}", response_model=ProcurementDeleted)
def delete_procurement(
    record_id: str,
    repo: Repository = Depends(get_repository),
    current_user: TokenData = Depends(is_manager)
):
    record = repo.delete(record_id)
    return {
        "message": f"procurement record with id {record.id} deleted successfully",
        "deletedRecord": ProcurementSchema.model_validate(record),
    }
