from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
import logging

from ..database import get_db, commit
from ..exceptions import NotFound, ValidationError
from ..models import Medicine, Treatment, BillMedicineItem, BillTreatmentItem
from ..schemas import (
    MedicineCreate, MedicineUpdate, MedicineResponse,
    TreatmentCreate, TreatmentUpdate, TreatmentResponse
)

logger = logging.getLogger(__name__)

router = APIRouter()

# ============ GENERIC CRUD FUNCTIONS ============

def create_catalog_routes(model_class, router_prefix: str, label: str, create_schema, update_schema,
                          response_schema, line_item_class, line_item_fk):
    """Generic list/create/update/delete routes for a billable catalog item"""

    def get_or_404(db: Session, item_id: int):
        db_item = db.query(model_class).filter(model_class.id == item_id).first()
        if not db_item:
            raise NotFound.for_entity(label, item_id)
        return db_item

    @router.get(f"/{router_prefix}", response_model=List[response_schema], name=f"list_{router_prefix}")
    def list_items(db: Session = Depends(get_db)):
        return db.query(model_class).order_by(model_class.name, model_class.id).all()

    @router.post(f"/{router_prefix}", response_model=response_schema, status_code=status.HTTP_201_CREATED,
                 name=f"create_{router_prefix}")
    def create_item(item: create_schema, db: Session = Depends(get_db)):
        db_item = model_class(**item.dict())
        db.add(db_item)
        db.flush()
        item_id = db_item.id
        commit(db, f"create {label.lower()}")
        return get_or_404(db, item_id)

    @router.patch(f"/{router_prefix}/{{item_id}}", response_model=response_schema, name=f"update_{router_prefix}")
    def update_item(item_id: int, item: update_schema, db: Session = Depends(get_db)):
        db_item = get_or_404(db, item_id)
        for field, value in item.dict(exclude_unset=True).items():
            if value is None:
                continue
            setattr(db_item, field, value)
        commit(db, f"update {label.lower()}")
        return get_or_404(db, item_id)

    @router.delete(f"/{router_prefix}/{{item_id}}", status_code=status.HTTP_204_NO_CONTENT,
                   name=f"delete_{router_prefix}")
    def delete_item(item_id: int, db: Session = Depends(get_db)):
        db_item = get_or_404(db, item_id)
        # Line items keep a reference to the catalog row they were billed from
        in_use = db.query(line_item_class.id).filter(line_item_fk == item_id).first()
        if in_use:
            raise ValidationError(f"{label} {item_id} is referenced by existing bills and cannot be deleted")
        db.delete(db_item)
        commit(db, f"delete {label.lower()}")
        logger.info("Deleted %s %s", label.lower(), item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return list_items, create_item, update_item, delete_item


# ============ REGISTER ROUTES ============

create_catalog_routes(
    Medicine, "medicines", "Medicine",
    MedicineCreate, MedicineUpdate, MedicineResponse,
    BillMedicineItem, BillMedicineItem.medicine_id,
)
create_catalog_routes(
    Treatment, "treatments", "Treatment",
    TreatmentCreate, TreatmentUpdate, TreatmentResponse,
    BillTreatmentItem, BillTreatmentItem.treatment_id,
)
