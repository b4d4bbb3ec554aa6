from fastapi import APIRouter, Depends
from typing import List

from . import api_error
from ..catalog import MaterialCatalog
from ..dependencies import get_catalog
from ..errors import UnknownMaterialError
from ..models import Material

router = APIRouter(prefix="/materials", tags=["materials"])


@router.get("/", response_model=List[Material])
def list_materials(catalog: MaterialCatalog = Depends(get_catalog)):
    return catalog.list()


@router.get("/{material_id}", response_model=Material)
def get_material(material_id: str, catalog: MaterialCatalog = Depends(get_catalog)):
    if material_id not in catalog:
        raise api_error(404, "unknown_material", str(UnknownMaterialError(material_id)))
    return catalog.get(material_id)
