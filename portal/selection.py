# portal/selection.py

"""
Location and category selection that gates the inquiry form.

Only lives in memory; the one way to carry it across page loads is the
query string (`to_query` / `from_query`), which is also what the share
link uses.
"""

from typing import Dict, List, Optional, Union
from urllib.parse import parse_qs, urlencode

from pydantic import BaseModel, Field

from core.logging_config import logger
from models.catalog import CATEGORY_CATALOG, areas_for_city, cities_for_state
from models.enums import ServiceCategory


class LocationSelection(BaseModel):
    state: str = ""
    city: str = ""
    areas: List[str] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return bool(self.state and self.city)

    def area_text(self) -> Optional[str]:
        """Areas as stored on an inquiry, or None when nothing is picked."""
        return ", ".join(self.areas) or None


class SelectionState:
    """
    Mutable selection mirroring the location filter and category picker.

    Picking a new state clears the city and areas; picking a new city
    clears the areas; picking a new category clears its option choices.
    """

    def __init__(self):
        self.location = LocationSelection()
        self.category: Optional[ServiceCategory] = None
        self.subcategory_choices: Dict[str, Union[str, List[str]]] = {}

    # -------------------------------------------------
    # Location
    # -------------------------------------------------
    @property
    def available_cities(self) -> List[str]:
        return cities_for_state(self.location.state) if self.location.state else []

    @property
    def available_areas(self) -> List[str]:
        return areas_for_city(self.location.city)

    def select_state(self, state: str):
        if state == self.location.state:
            return
        self.location = LocationSelection(state=state or "")

    def select_city(self, city: str):
        if city == self.location.city:
            return
        if city and city not in self.available_cities:
            raise ValueError(f"{city} is not a city of {self.location.state or 'the selected state'}")
        self.location = LocationSelection(state=self.location.state, city=city or "")

    def toggle_area(self, area: str):
        areas = list(self.location.areas)
        if area in areas:
            areas.remove(area)
        else:
            areas.append(area)
        self.location = LocationSelection(
            state=self.location.state, city=self.location.city, areas=areas
        )

    @property
    def can_show_form(self) -> bool:
        return self.location.is_complete

    # -------------------------------------------------
    # Category
    # -------------------------------------------------
    def select_category(self, category: Union[str, ServiceCategory]):
        category = ServiceCategory(category)
        if category != self.category:
            self.subcategory_choices = {}
        self.category = category

    def _option(self, subcategory: str):
        if self.category is None:
            raise ValueError("Select a category first")
        for option in CATEGORY_CATALOG[self.category].subcategories:
            if option.name == subcategory:
                return option
        raise ValueError(f"{subcategory} is not offered for {self.category}")

    def choose(self, subcategory: str, value: str):
        """Set a single-choice ("select") subcategory."""
        option = self._option(subcategory)
        if value not in option.options:
            raise ValueError(f"{value} is not an option of {subcategory}")
        self.subcategory_choices[subcategory] = value

    def toggle(self, subcategory: str, value: str, checked: bool):
        """Tick or untick a multi-choice ("checkbox") subcategory option."""
        option = self._option(subcategory)
        if value not in option.options:
            raise ValueError(f"{value} is not an option of {subcategory}")
        current = list(self.subcategory_choices.get(subcategory) or [])
        if checked and value not in current:
            current.append(value)
        elif not checked and value in current:
            current.remove(value)
        self.subcategory_choices[subcategory] = current

    def subcategory_text(self) -> Optional[str]:
        """Flatten the choices to the free-text subcategory column."""
        parts = []
        for name, value in self.subcategory_choices.items():
            if isinstance(value, list):
                if not value:
                    continue
                value = ", ".join(value)
            parts.append(f"{name}: {value}")
        return "; ".join(parts) or None

    # -------------------------------------------------
    # Query string round trip
    # -------------------------------------------------
    def to_query(self) -> str:
        params = {}
        if self.location.state:
            params["state"] = self.location.state
        if self.location.city:
            params["city"] = self.location.city
        if self.location.areas:
            params["areas"] = ",".join(self.location.areas)
        if self.category is not None:
            params["category"] = self.category.value
            subcategory = self.subcategory_text()
            if subcategory:
                params["subcategory"] = subcategory
        return urlencode(params)

    def _restore_choices(self, text: str):
        # Same "Name: a, b; Name: c" form that subcategory_text writes.
        for part in text.split(";"):
            name, _, value = part.partition(":")
            name, value = name.strip(), value.strip()
            if not name or not value:
                continue
            try:
                option = self._option(name)
                if option.type == "checkbox":
                    for item in value.split(","):
                        self.toggle(name, item.strip(), True)
                else:
                    self.choose(name, value)
            except ValueError:
                logger.debug(f"Ignoring stale subcategory choice {name!r}={value!r}")

    @classmethod
    def from_query(cls, query: str) -> "SelectionState":
        """
        Rebuild a selection from a share link's query string.

        Location values are taken as given (the link may predate catalog
        changes); an unknown category is ignored, as are subcategory
        choices the category no longer offers.
        """
        params = {k: v[0] for k, v in parse_qs(query.lstrip("?")).items()}
        selection = cls()
        state = params.get("state", "")
        city = params.get("city", "") if state else ""
        areas = [a for a in params.get("areas", "").split(",") if a] if city else []
        selection.location = LocationSelection(state=state, city=city, areas=areas)
        category = params.get("category")
        if category and ServiceCategory.has_value(category):
            selection.category = ServiceCategory(category)
            selection._restore_choices(params.get("subcategory", ""))
        return selection
