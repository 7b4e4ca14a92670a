"""
Sitio community profile — the read-only input of the recommendation engine.

``CommunityProfile`` mirrors the Catch-up Sitio Profiling Survey section by
section (A. basic information through J. priority needs). Every section has
defaults, so a partially-populated record still validates: a missing
optional sub-field means "zero / absent", never an error. Criteria treat that
case as "not applicable / no need".

Keys
----
The survey data is keyed in camelCase (``totalHouseholds``,
``sitioClassification.gida``); Python code uses snake_case. Both spellings
are accepted on input (``populate_by_name=True``); dump with
``by_alias=True`` to get the survey spelling back.

Unknown keys (``recommendations``, ``averageNeedScore``, ``customFields``,
pet and garden statistics, ...) are ignored.

Invariants
----------
  - Counts, lengths, distances, areas and income are non-negative.
  - ``condition`` ratings are in 1..5; priority ``rating`` is in 0..3.
  - Models are frozen: a profile cannot change during an evaluation pass.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from sitio_recommender.taxonomy.ppa_taxonomy import (
    FoodSecurity,
    MobileSignal,
    StudentsPerRoom,
)

Count = Annotated[int, Field(ge=0)]
Amount = Annotated[float, Field(ge=0.0)]
YesNo = Literal["yes", "no"]


class _Section(BaseModel):
    """Shared configuration for every profile section."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


def _check_condition(v: Optional[int]) -> Optional[int]:
    if v is not None and not 1 <= v <= 5:
        raise ValueError(f"condition must be in [1, 5], got {v}.")
    return v


# ── Reusable detail records ───────────────────────────────────────────────────


class FacilityDetails(_Section):
    """Inventory entry for one community facility (Section D).

    Attributes:
        exists: ``"yes"`` when at least one facility is inside the sitio.
        count: Number of facilities (when it exists).
        distance_to_nearest: Km to the nearest one (when it does not exist).
        condition: Condition of the best facility, 1 = bad ... 5 = excellent.
    """

    exists: YesNo = "no"
    count: Optional[Count] = None
    distance_to_nearest: Optional[Amount] = None
    condition: Optional[int] = None

    @field_validator("condition")
    @classmethod
    def validate_condition(cls, v: Optional[int]) -> Optional[int]:
        return _check_condition(v)


class RoadDetails(_Section):
    """Inventory entry for one road surface type (Section E)."""

    exists: YesNo = "no"
    length: Optional[Amount] = None
    condition: Optional[int] = None

    @field_validator("condition")
    @classmethod
    def validate_condition(cls, v: Optional[int]) -> Optional[int]:
        return _check_condition(v)


class WaterSourceStatus(_Section):
    """Status of one water-source tier (Section G)."""

    exists: YesNo = "no"
    functioning_count: Optional[Count] = None
    not_functioning_count: Optional[Count] = None


class HazardDetails(_Section):
    """Hazard occurrences in the past 12 months (Section I)."""

    frequency: Count = 0


class PriorityItem(_Section):
    """One community-rated priority (Section J).

    ``rating``: 0 = not needed, 1 = low, 2 = medium, 3 = very urgent.
    """

    name: str
    rating: int = 0

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: int) -> int:
        if not 0 <= v <= 3:
            raise ValueError(f"priority rating must be in [0, 3], got {v}.")
        return v


# ── Sections ──────────────────────────────────────────────────────────────────


class SitioClassification(_Section):
    gida: bool = False
    indigenous: bool = False
    conflict: bool = False


class MainAccess(_Section):
    paved_road: bool = False
    unpaved_road: bool = False
    footpath: bool = False
    boat: bool = False


class Population(_Section):
    total_male: Count = 0
    total_female: Count = 0


class VulnerableGroups(_Section):
    muslim_count: Count = 0
    ip_count: Count = 0
    seniors_count: Count = 0
    labor_force_60_to_64_count: Count = Field(default=0, alias="laborForce60to64Count")
    unemployed_count: Count = 0
    no_birth_cert_count: Count = 0
    no_national_id_count: Count = Field(default=0, alias="noNationalIDCount")
    out_of_school_youth: Count = 0


class ElectricitySources(_Section):
    grid: Count = 0
    solar: Count = 0
    battery: Count = 0
    generator: Count = 0


class Facilities(_Section):
    health_center: FacilityDetails = FacilityDetails()
    pharmacy: FacilityDetails = FacilityDetails()
    community_toilet: FacilityDetails = FacilityDetails()
    kindergarten: FacilityDetails = FacilityDetails()
    elementary_school: FacilityDetails = FacilityDetails()
    high_school: FacilityDetails = FacilityDetails()
    madrasah: FacilityDetails = FacilityDetails()
    market: FacilityDetails = FacilityDetails()


class RoadInfrastructure(_Section):
    asphalt: RoadDetails = RoadDetails()
    concrete: RoadDetails = RoadDetails()
    gravel: RoadDetails = RoadDetails()
    natural: RoadDetails = RoadDetails()


class WaterSources(_Section):
    natural: WaterSourceStatus = WaterSourceStatus()
    level1: WaterSourceStatus = WaterSourceStatus()
    level2: WaterSourceStatus = WaterSourceStatus()
    level3: WaterSourceStatus = WaterSourceStatus()


class SanitationTypes(_Section):
    water_sealed: bool = False
    pit_latrine: bool = False
    community_cr: bool = Field(default=False, alias="communityCR")
    open_defecation: bool = False


class WorkerClass(_Section):
    private_household: Count = 0
    private_establishment: Count = 0
    government: Count = 0
    self_employed: Count = 0
    employer: Count = 0
    ofw: Count = 0


class Agriculture(_Section):
    number_of_farmers: Count = 0
    number_of_associations: Count = 0
    estimated_farm_area_hectares: Amount = 0.0


class Hazards(_Section):
    flood: HazardDetails = HazardDetails()
    landslide: HazardDetails = HazardDetails()
    drought: HazardDetails = HazardDetails()
    earthquake: HazardDetails = HazardDetails()


# ── Profile ───────────────────────────────────────────────────────────────────


class CommunityProfile(_Section):
    """One sitio's demographic, infrastructure and risk record for a year.

    Only ``sitio_name`` is conventionally filled by every caller; everything
    else defaults to the "nothing reported" value.
    """

    # A. Basic information
    municipality: str = ""
    barangay: str = ""
    sitio_name: str = ""
    sitio_code: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    sitio_classification: SitioClassification = SitioClassification()
    main_access: MainAccess = MainAccess()

    # B. Population & demographics
    total_population: Count = 0
    total_households: Count = 0
    registered_voters: Count = 0
    labor_force_count: Count = 0
    school_age_children: Count = 0
    population: Population = Population()
    vulnerable_groups: VulnerableGroups = VulnerableGroups()

    # C. Utilities & connectivity
    households_with_toilet: Count = 0
    households_with_electricity: Count = 0
    electricity_sources: ElectricitySources = ElectricitySources()
    mobile_signal: MobileSignal = MobileSignal.NONE
    households_with_internet: Count = 0

    # D-E. Facilities and roads
    facilities: Facilities = Facilities()
    infrastructure: RoadInfrastructure = RoadInfrastructure()

    # F. Education
    students_per_room: StudentsPerRoom = StudentsPerRoom.LESS_THAN_46

    # G. Water & sanitation
    water_sources: WaterSources = WaterSources()
    sanitation_types: SanitationTypes = SanitationTypes()

    # H. Livelihood & agriculture
    worker_class: WorkerClass = WorkerClass()
    average_daily_income: Amount = 0.0
    agriculture: Agriculture = Agriculture()
    crops: tuple[str, ...] = ()
    livestock: tuple[str, ...] = ()

    # I. Safety & risk
    hazards: Hazards = Hazards()
    food_security: FoodSecurity = FoodSecurity.SECURE
    peace_and_order: Optional[str] = None

    # J. Priority needs
    priorities: tuple[PriorityItem, ...] = ()
