# routers/catalog.py

from fastapi import APIRouter

from core.errors import NotFoundError
from models.catalog import (
    CATEGORY_CATALOG,
    STATE_CITIES,
    areas_for_city,
    cities_for_state,
    list_states,
)

router = APIRouter(
    prefix="/catalog",
    tags=["Catalog"],
)


# -----------------------------------------------------
# GET /catalog/categories
# -----------------------------------------------------
@router.get("/categories", summary="Service categories and their subcategory options")
def get_categories():
    return {"categories": [info.model_dump(mode="json") for info in CATEGORY_CATALOG.values()]}


# -----------------------------------------------------
# GET /catalog/states
# -----------------------------------------------------
@router.get("/states", summary="States served")
def get_states():
    return {"states": list_states()}


# -----------------------------------------------------
# GET /catalog/states/{state}/cities
# -----------------------------------------------------
@router.get("/states/{state}/cities", summary="Cities (districts) of a state")
def get_cities(state: str):
    if state not in STATE_CITIES:
        raise NotFoundError(f"Unknown state: {state}")
    return {"state": state, "cities": cities_for_state(state)}


# -----------------------------------------------------
# GET /catalog/cities/{city}/areas
# -----------------------------------------------------
@router.get("/cities/{city}/areas", summary="Areas of a city")
def get_areas(city: str):
    return {"city": city, "areas": areas_for_city(city)}
