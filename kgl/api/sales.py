import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kgl.db.session import get_db
from kgl.db.repository import Repository
from kgl.models.sale import Sale as SaleModel
from kgl.schemas.sale import (
    Sale as SaleSchema,
    SaleCreate,
    SaleUpdate,
    SaleCreated,
    SaleList,
    SaleFound,
    SaleUpdated,
    SaleDeleted,
    check_sale_amounts,
)
from kgl.schemas.user import TokenData
from kgl.auth.security import is_sales_agent, is_staff

logger = logging.getLogger("kgl.sales")

router = APIRouter()


def get_repository(db: Session = Depends(get_db)) -> Repository:
    return Repository(db, SaleModel, "sale")


def _check_amounts(sale: SaleModel) -> None:
    # A patch can flip saleType, so the rule is checked on the merged record
    check_sale_amounts(sale.sale_type, sale.amount_paid, sale.amount_due)


# --------------------------------------------------------------------
# Record a sale (SalesAgent only) -> POST /sales
# --------------------------------------------------------------------
@router.post("", response_model=SaleCreated, status_code=status.HTTP_201_CREATED)
def create_sale(
    sale: SaleCreate,
    repo: Repository = Depends(get_repository),
    current_user: TokenData = Depends(is_sales_agent)
):
    record = repo.create(sale.model_dump())
    logger.info("Sales agent %s recorded %s sale %s", current_user.user_id, record.sale_type, record.id)
    return {"message": "Sale record created successfully", "sale": SaleSchema.model_validate(record)}

# --------------------------------------------------------------------
# All sales (public) -> GET /sales
# --------------------------------------------------------------------
@router.get("", response_model=SaleList)
def read_sales(repo: Repository = Depends(get_repository)):
    records = repo.list_all()
    return {"message": "sales successfully loaded", "sales": [SaleSchema.model_validate(r) for r in records]}

# --------------------------------------------------------------------
# One sale (public) -> GET /sales/{id}
# --------------------------------------------------------------------
@router.get("/{record_id}", response_model=SaleFound)
def read_sale(record_id: str, repo: Repository = Depends(get_repository)):
    record = repo.get(record_id)
    return {"message": "Sale found successfully", "sale": SaleSchema.model_validate(record)}

# --------------------------------------------------------------------
# Partial update (Manager or SalesAgent) -> PATCH /sales/{id}
# --------------------------------------------------------------------
@router.patch("/{record_id}", response_model=SaleUpdated)
def update_sale(
    record_id: str,
    sale: SaleUpdate,
    repo: Repository = Depends(get_repository),
    current_user: TokenData = Depends(is_staff)
):
    record = repo.update(record_id, sale.changes(), check=_check_amounts)
    return {"message": f"Sale with id {record.id} updated", "updatedSale": SaleSchema.model_validate(record)}

# --------------------------------------------------------------------
# Delete (Manager or SalesAgent) -> DELETE /sales/{id}
# --------------------------------------------------------------------
@router.delete("/{record_id}", response_model=SaleDeleted)
def delete_sale(
    record_id: str,
    repo: Repository = Depends(get_repository),
    current_user: TokenData = Depends(is_staff)
):
    record = repo.delete(record_id)
    return {
        "message": f"Sale with id {record.id} deleted successfully",
        "deletedSale": SaleSchema.model_validate(record),
    }
