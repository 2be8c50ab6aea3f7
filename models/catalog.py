# models/catalog.py

"""
Static location and service catalog used by the inquiry form.

The marketing site lets visitors pick a state, then a city (district),
then any number of areas, and a service category with its subcategory
options. None of this is enforced by the inquiries API; it only feeds
the form and the selection state.
"""

from typing import Dict, List

from pydantic import BaseModel

from models.enums import ServiceCategory


# -----------------------------------------------------
# Locations
# -----------------------------------------------------
STATE_CITIES: Dict[str, List[str]] = {
    "Maharashtra": [
        "Mumbai", "Mumbai Suburban", "Pune", "Nagpur", "Thane",
        "Nashik", "Aurangabad", "Solapur", "Kolhapur", "Sangli",
    ],
    "Delhi": ["New Delhi", "Central Delhi", "East Delhi", "North Delhi", "South Delhi"],
    "Karnataka": ["Bengaluru", "Mysuru", "Hubli", "Mangaluru"],
    "Tamil Nadu": ["Chennai", "Coimbatore", "Madurai"],
    "Gujarat": ["Ahmedabad", "Surat", "Vadodara", "Rajkot"],
    "Rajasthan": ["Jaipur", "Jodhpur", "Udaipur"],
    "West Bengal": ["Kolkata", "Howrah"],
    "Uttar Pradesh": ["Lucknow", "Kanpur", "Agra", "Varanasi"],
    "Haryana": ["Gurgaon", "Faridabad"],
    "Punjab": ["Chandigarh", "Ludhiana", "Amritsar"],
}

SAMPLE_AREAS: Dict[str, List[str]] = {
    "Mumbai": ["Colaba", "Bandra", "Andheri", "Borivali", "Ghatkopar", "Malad"],
    "Pune": ["Kothrud", "Shivajinagar", "Hadapsar", "Aundh", "Camp", "Wakad"],
    "Ahmedabad": ["Navrangpura", "Satellite", "Maninagar", "Bopal", "Paldi"],
    "Bengaluru": ["Jayanagar", "Koramangala", "Whitefield", "Malleshwaram", "Indiranagar"],
}

AREA_SUFFIXES = ("Central", "East", "West", "North", "South")


def list_states() -> List[str]:
    return list(STATE_CITIES)


def cities_for_state(state: str) -> List[str]:
    """Cities for a state, or an empty list for an unknown state."""
    return list(STATE_CITIES.get(state, []))


def areas_for_city(city: str) -> List[str]:
    """Known areas for a city, or generated compass-point areas."""
    if not city:
        return []
    if city in SAMPLE_AREAS:
        return list(SAMPLE_AREAS[city])
    return [f"{city} {suffix}" for suffix in AREA_SUFFIXES]


# -----------------------------------------------------
# Service categories
# -----------------------------------------------------
class SubcategoryOption(BaseModel):
    name: str
    type: str  # "select" (one value) or "checkbox" (many values)
    options: List[str]


class CategoryInfo(BaseModel):
    category: ServiceCategory
    description: str
    subcategories: List[SubcategoryOption]


CATEGORY_CATALOG: Dict[ServiceCategory, CategoryInfo] = {
    info.category: info
    for info in [
        CategoryInfo(
            category=ServiceCategory.religious,
            description="Jain religious facilities and spiritual centers",
            subcategories=[
                SubcategoryOption(
                    name="Jain Sect", type="select",
                    options=["Shwetambar", "Digambar", "Sthanakvasi", "Terapanth"],
                ),
                SubcategoryOption(
                    name="Building Type", type="select",
                    options=["Jain Temple", "Jain Upashray", "Jain Sthanak"],
                ),
            ],
        ),
        CategoryInfo(
            category=ServiceCategory.residential,
            description="Housing solutions for Jain families",
            subcategories=[
                SubcategoryOption(
                    name="Property Type", type="select",
                    options=["2BHK (540 sqft)", "3BHK (720 sqft)"],
                ),
                SubcategoryOption(
                    name="Facilities", type="checkbox",
                    options=["Furnished", "Electronics", "Utensils", "Ration/Kirana", "Other Amenities"],
                ),
            ],
        ),
        CategoryInfo(
            category=ServiceCategory.commercial,
            description="Business and commercial spaces",
            subcategories=[
                SubcategoryOption(
                    name="Space Type", type="select",
                    options=["Shop (300 sqft)", "Office (500 sqft)", "Showroom (1000 sqft)"],
                ),
            ],
        ),
        CategoryInfo(
            category=ServiceCategory.education,
            description="Educational institutions and services",
            subcategories=[
                SubcategoryOption(
                    name="Institution Type", type="select",
                    options=["University", "College", "School", "Training Center"],
                ),
                SubcategoryOption(
                    name="Special Services", type="checkbox",
                    options=["Paperless Admission", "Online Classes", "Hostel Facility", "Scholarship Available"],
                ),
            ],
        ),
        CategoryInfo(
            category=ServiceCategory.medical,
            description="Healthcare services and facilities",
            subcategories=[
                SubcategoryOption(
                    name="Treatment Type", type="checkbox",
                    options=["Ayurvedic", "Homeopathic", "Allopathic", "Panchakarma", "Yoga"],
                ),
            ],
        ),
        CategoryInfo(
            category=ServiceCategory.social,
            description="Community and social services",
            subcategories=[
                SubcategoryOption(
                    name="Facility Type", type="select",
                    options=["Animal Hospital", "Social Hall", "Community Center", "Event Space"],
                ),
            ],
        ),
    ]
}


def get_category(category: str) -> CategoryInfo:
    """Raises ValueError for a category outside ServiceCategory."""
    return CATEGORY_CATALOG[ServiceCategory(category)]
