"""
Built-in Infrastructure PPA configurations.

Nine physical-works candidates.  Each criterion's logic is a module-level
function named after what it measures; thresholds are inclusive (``>=``)
unless stated otherwise, and every branch returns a non-empty reason.

Condition ratings follow the survey scale:
    1 = bad   2 = poor   3 = fair   4 = good   5 = excellent
"""

from __future__ import annotations

from sitio_recommender.models.profile import CommunityProfile
from sitio_recommender.recommendations.criteria import (
    Criterion,
    CriterionResult,
    PPAConfig,
)
from sitio_recommender.recommendations.indicators import (
    PIPED_WATER_LEVELS,
    count_functional_water_sources,
    coverage_pct,
    format_number,
    format_percent,
    has_paved_roads,
    has_water_source_needing_repair,
    priority_rating,
    road_lengths,
    total_population,
    worst_road_condition,
)
from sitio_recommender.taxonomy.ppa_taxonomy import PPACategory, PriorityName, StudentsPerRoom

_NO_HOUSEHOLD_DATA = "No household data to assess coverage"


# ── Potable water system ──────────────────────────────────────────────────────

def _no_functional_piped_water(profile: CommunityProfile) -> CriterionResult:
    if count_functional_water_sources(profile.water_sources, PIPED_WATER_LEVELS) == 0:
        return CriterionResult(3.0, "No functional Level 2 or Level 3 water system available")
    return CriterionResult(0.0, "Functional water system exists")


def _relies_on_natural_sources(profile: CommunityProfile) -> CriterionResult:
    ws = profile.water_sources
    only_natural = (
        ws.natural.exists == "yes"
        and ws.level1.exists == "no"
        and ws.level2.exists == "no"
        and ws.level3.exists == "no"
    )
    if only_natural:
        return CriterionResult(
            2.5, "Community relies entirely on natural sources (springs/rivers/wells)"
        )
    return CriterionResult(0.0, "Has developed water sources")


def _water_system_needs_repair(profile: CommunityProfile) -> CriterionResult:
    if has_water_source_needing_repair(profile.water_sources):
        return CriterionResult(1.5, "Existing water system requires repair")
    return CriterionResult(0.0, "No systems in need of repair")


def _waterborne_disease_risk(profile: CommunityProfile) -> CriterionResult:
    # Flooding is the only waterborne-disease proxy the survey captures.
    if profile.hazards.flood.frequency > 0:
        return CriterionResult(1.5, "Flooding risk indicates potential waterborne disease concern")
    return CriterionResult(0.0, "No reported waterborne disease risk")


def _water_population_impact(profile: CommunityProfile) -> CriterionResult:
    population = total_population(profile)
    if population >= 500:
        return CriterionResult(1.5, f"Large population ({population}) would benefit")
    if population >= 300:
        return CriterionResult(1.0, f"Moderate population ({population}) would benefit")
    if population >= 150:
        return CriterionResult(0.5, f"Small population ({population}) would benefit")
    return CriterionResult(0.0, "Very small population")


def _water_gida_area(profile: CommunityProfile) -> CriterionResult:
    if profile.sitio_classification.gida:
        return CriterionResult(1.0, "Classified as GIDA")
    return CriterionResult(0.0, "Not classified as GIDA")


POTABLE_WATER_SYSTEM_CONFIG = PPAConfig(
    id="potable-water-system",
    name="Construction of Potable Water System",
    category=PPACategory.INFRASTRUCTURE,
    description="",
    criteria=(
        Criterion(
            "no_functional_water", "No Functional Water Source",
            "No level 2/3 functional water systems available",
            3.0, _no_functional_piped_water,
        ),
        Criterion(
            "natural_source_only", "Reliance on Natural Sources",
            "Community relies only on natural water sources",
            2.5, _relies_on_natural_sources,
        ),
        Criterion(
            "water_repair_needed", "Existing System Needs Repair",
            "Water infrastructure exists but needs repair",
            1.5, _water_system_needs_repair,
        ),
        Criterion(
            "waterborne_diseases", "Waterborne Disease Prevalence",
            "Community experiences waterborne health issues",
            1.5, _waterborne_disease_risk,
        ),
        Criterion(
            "large_population", "Large Population Impact",
            "High population would benefit from improved water access",
            1.5, _water_population_impact,
        ),
        Criterion(
            "gida_area", "GIDA Classification",
            "Geographically Isolated and Disadvantaged Area",
            1.0, _water_gida_area,
        ),
    ),
)


# ── Concrete tire path ────────────────────────────────────────────────────────

def _no_paved_roads(profile: CommunityProfile) -> CriterionResult:
    if not has_paved_roads(profile):
        return CriterionResult(3.5, "No paved roads exist in the sitio")
    return CriterionResult(0.0, "Some paved roads exist")


def _footpath_primary_access(profile: CommunityProfile) -> CriterionResult:
    access = profile.main_access
    if access.footpath and not access.paved_road and not access.unpaved_road:
        return CriterionResult(2.5, "Primary access is footpath only")
    if access.footpath:
        return CriterionResult(1.5, "Footpath is one of the access modes")
    return CriterionResult(0.0, "Not primarily accessed by footpath")


def _difficult_terrain(profile: CommunityProfile) -> CriterionResult:
    if profile.hazards.landslide.frequency > 0:
        return CriterionResult(2.0, "Landslide risk indicates steep/difficult terrain")
    return CriterionResult(0.0, "No indicators of particularly difficult terrain")


def _tire_path_road_condition(profile: CommunityProfile) -> CriterionResult:
    worst = worst_road_condition(profile)
    if worst is None:
        return CriterionResult(0.0, "No roads to assess")
    if worst == 1:
        return CriterionResult(1.5, "Roads are dilapidated and difficult for vehicles")
    if worst == 2:
        return CriterionResult(1.0, "Roads have potholes and slow travel")
    return CriterionResult(0.0, "Road condition is acceptable")


def _minority_paved_coverage(profile: CommunityProfile) -> CriterionResult:
    paved, total = road_lengths(profile)
    if total > 0 and paved / total < 0.5:
        return CriterionResult(0.5, "Less than 50% of roads are paved")
    return CriterionResult(0.0, "Adequate road coverage")


CONCRETE_TIRE_PATH_CONFIG = PPAConfig(
    id="concrete-tire-path",
    name="Construction of Concrete Tire Path",
    category=PPACategory.INFRASTRUCTURE,
    description=(
        "Development of durable concrete tire pathways to improve accessibility in "
        "areas with challenging terrain, particularly where traditional road "
        "construction is difficult or where footpaths are the primary access route."
    ),
    criteria=(
        Criterion(
            "no_paved_roads", "No Paved Roads",
            "Sitio has no paved road infrastructure",
            3.5, _no_paved_roads,
        ),
        Criterion(
            "footpath_access", "Footpath Primary Access",
            "Main access is via footpath",
            2.5, _footpath_primary_access,
        ),
        Criterion(
            "difficult_terrain", "Challenging Terrain",
            "Geography suggests steep or muddy conditions",
            2.0, _difficult_terrain,
        ),
        Criterion(
            "poor_road_condition", "Poor Existing Road Condition",
            "Existing roads are in poor/bad condition",
            1.5, _tire_path_road_condition,
        ),
        Criterion(
            "minority_coverage", "Minimal Road Coverage",
            "Less than 50% paved road coverage",
            0.5, _minority_paved_coverage,
        ),
    ),
)


# ── Road opening and rehabilitation ───────────────────────────────────────────

def _unpaved_primary_access(profile: CommunityProfile) -> CriterionResult:
    if profile.main_access.unpaved_road and not profile.main_access.paved_road:
        return CriterionResult(3.0, "Primary access is unpaved roads")
    return CriterionResult(0.0, "Has paved road access")


def _dilapidated_roads(profile: CommunityProfile) -> CriterionResult:
    worst = worst_road_condition(profile)
    if worst is None:
        return CriterionResult(0.0, "No roads to assess")
    if worst == 1:
        return CriterionResult(2.5, "Roads are dilapidated and difficult for cars")
    if worst == 2:
        return CriterionResult(1.5, "Roads have significant potholes")
    return CriterionResult(0.0, "Roads are in acceptable condition")


def _disjointed_road_network(profile: CommunityProfile) -> CriterionResult:
    paved, total = road_lengths(profile)
    if total > 0:
        ratio = paved / total
        if 0 < ratio < 0.3:
            return CriterionResult(2.0, "Roads are patchy and disjointed - rehabilitation needed")
        if ratio < 0.5:
            return CriterionResult(1.0, "Less than 50% paved - major work needed")
    return CriterionResult(0.0, "Road coverage is adequate")


def _road_population_to_serve(profile: CommunityProfile) -> CriterionResult:
    population = total_population(profile)
    if population >= 400:
        return CriterionResult(1.5, f"Large population ({population}) needs better access")
    if population >= 200:
        return CriterionResult(1.0, f"Moderate population ({population}) needs better access")
    if population >= 100:
        return CriterionResult(0.5, f"Small population ({population}) needs better access")
    return CriterionResult(0.0, "Very small population")


def _farm_to_market_need(profile: CommunityProfile) -> CriterionResult:
    farmers = profile.agriculture.number_of_farmers
    if farmers >= 20:
        return CriterionResult(1.0, f"{farmers} farmers need farm-to-market access")
    if farmers > 0:
        return CriterionResult(0.5, "Farming community needs market access")
    return CriterionResult(0.0, "Not primarily an agricultural community")


ROAD_OPENING_CONFIG = PPAConfig(
    id="road-opening-rehabilitation",
    name="Road Opening and Rehabilitation",
    category=PPACategory.INFRASTRUCTURE,
    description=(
        "Construction and rehabilitation of unpaved roads to establish or improve "
        "vehicular access, enhancing connectivity for communities with limited or "
        "deteriorating road infrastructure."
    ),
    criteria=(
        Criterion(
            "unpaved_access", "Unpaved Road Access",
            "Primary access is via unpaved/earth roads",
            3.0, _unpaved_primary_access,
        ),
        Criterion(
            "bad_road_condition", "Dilapidated Road Condition",
            "Roads are in bad/impassable condition",
            2.5, _dilapidated_roads,
        ),
        Criterion(
            "intermittent_coverage", "Disjointed Road Network",
            "Roads are patchy and need rehabilitation",
            2.0, _disjointed_road_network,
        ),
        Criterion(
            "population_size", "Population to Serve",
            "Number of people who would benefit",
            1.5, _road_population_to_serve,
        ),
        Criterion(
            "livelihood_farming", "Agricultural Community",
            "Farming is a major livelihood requiring farm-to-market access",
            1.0, _farm_to_market_need,
        ),
    ),
)


def _road_opening_community_priority(profile: CommunityProfile) -> CriterionResult:
    rating = priority_rating(profile, PriorityName.ROAD_OPENING)
    if rating == 3:
        return CriterionResult(2.0, "Community prioritizes road access as very urgent")
    if rating == 2:
        return CriterionResult(1.0, "Community has moderate road access priority")
    return CriterionResult(0.0, "Road access not a stated priority")


# Optional rule for ROAD_OPENING_CONFIG.with_criterion(); not enabled by default.
ROAD_OPENING_PRIORITY = Criterion(
    "custom_market_access", "Road Opening Priority",
    "Community prioritizes road access",
    2.0, _road_opening_community_priority,
)


# ── Multi-purpose community hub ───────────────────────────────────────────────

def _no_community_facility(profile: CommunityProfile) -> CriterionResult:
    # The health center is the only communal building the survey inventories.
    if profile.facilities.health_center.exists == "no":
        return CriterionResult(3.0, "No central community facility available")
    return CriterionResult(0.0, "Has some community facility")


def _indigenous_governance_space(profile: CommunityProfile) -> CriterionResult:
    ip_count = profile.vulnerable_groups.ip_count
    if profile.sitio_classification.indigenous and ip_count >= 50:
        return CriterionResult(2.5, f"{ip_count} Indigenous People need tribal hall")
    if profile.sitio_classification.indigenous:
        return CriterionResult(1.5, "Indigenous community needs governance space")
    return CriterionResult(0.0, "Not an Indigenous People community")


def _conflict_dispute_resolution(profile: CommunityProfile) -> CriterionResult:
    if profile.sitio_classification.conflict:
        return CriterionResult(2.0, "Conflict-affected area needs dispute resolution venue")
    return CriterionResult(0.0, "No recent conflict reported")


def _household_gathering_need(profile: CommunityProfile) -> CriterionResult:
    households = profile.total_households
    if households >= 100:
        return CriterionResult(1.5, f"{households} households need community space")
    if households >= 50:
        return CriterionResult(1.0, f"{households} households would benefit")
    return CriterionResult(0.0, "Small household count")


def _hub_gida_area(profile: CommunityProfile) -> CriterionResult:
    if profile.sitio_classification.gida:
        return CriterionResult(1.0, "GIDA area needs community development space")
    return CriterionResult(0.0, "Not classified as GIDA")


COMMUNITY_HUB_CONFIG = PPAConfig(
    id="community-hub",
    name="Construction of Multi-Purpose Community Hub",
    category=PPACategory.INFRASTRUCTURE,
    description=(
        "Establishment of a multi-functional community center to serve as a "
        "gathering space for social activities, governance, dispute resolution, "
        "and community programs, particularly beneficial for indigenous and "
        "conflict-affected communities."
    ),
    criteria=(
        Criterion(
            "no_community_facility", "No Community Facility Exists",
            "Lacks a dedicated community gathering space",
            3.0, _no_community_facility,
        ),
        Criterion(
            "indigenous_community", "Indigenous People Community",
            "IP communities benefit from tribal halls for governance",
            2.5, _indigenous_governance_space,
        ),
        Criterion(
            "conflict_context", "Conflict-Affected Area",
            "Community hub aids dispute resolution and social cohesion",
            2.0, _conflict_dispute_resolution,
        ),
        Criterion(
            "large_household_count", "Large Household Count",
            "Many households need gathering space",
            1.5, _household_gathering_need,
        ),
        Criterion(
            "gida_classification", "GIDA Classification",
            "GIDA areas need community infrastructure",
            1.0, _hub_gida_area,
        ),
    ),
)


# ── Madrasah facility ─────────────────────────────────────────────────────────

_NON_MUSLIM = "Not applicable - non-Muslim community"


def _muslim_population(profile: CommunityProfile) -> CriterionResult:
    muslims = profile.vulnerable_groups.muslim_count
    if muslims >= 100:
        return CriterionResult(4.0, f"{muslims} Muslims need Madrasah facility")
    if muslims >= 50:
        return CriterionResult(3.0, f"{muslims} Muslims would benefit from Madrasah")
    if muslims >= 20:
        return CriterionResult(1.5, f"{muslims} Muslims in community")
    return CriterionResult(0.0, "Very small Muslim population")


def _no_madrasah(profile: CommunityProfile) -> CriterionResult:
    if profile.vulnerable_groups.muslim_count == 0:
        return CriterionResult(0.0, _NON_MUSLIM)
    if profile.facilities.madrasah.exists == "no":
        return CriterionResult(3.0, "No Madrasah facility exists")
    return CriterionResult(0.0, "Madrasah facility exists")


def _madrasah_condition(profile: CommunityProfile) -> CriterionResult:
    if profile.vulnerable_groups.muslim_count == 0:
        return CriterionResult(0.0, _NON_MUSLIM)
    madrasah = profile.facilities.madrasah
    if madrasah.exists == "yes":
        if madrasah.condition == 1:
            return CriterionResult(2.0, "Madrasah is unsafe and needs replacement")
        if madrasah.condition == 2:
            return CriterionResult(1.5, "Madrasah requires immediate repair")
        if madrasah.condition == 3:
            return CriterionResult(0.5, "Madrasah showing signs of age")
    return CriterionResult(0.0, "Madrasah in good condition or does not exist")


def _madrasah_distance(profile: CommunityProfile) -> CriterionResult:
    if profile.vulnerable_groups.muslim_count == 0:
        return CriterionResult(0.0, _NON_MUSLIM)
    madrasah = profile.facilities.madrasah
    distance = madrasah.distance_to_nearest
    if madrasah.exists == "no" and distance:
        if distance >= 5:
            return CriterionResult(1.0, f"Nearest Madrasah is {format_number(distance)}km away")
        if distance >= 2:
            return CriterionResult(0.5, f"Nearest Madrasah is {format_number(distance)}km away")
    return CriterionResult(0.0, "Madrasah exists or nearby")


MADRASAH_FACILITY_CONFIG = PPAConfig(
    id="madrasah-facility",
    name="Construction of Madrasah Facility",
    category=PPACategory.INFRASTRUCTURE,
    description=(
        "Construction or rehabilitation of Madrasah facilities to provide religious "
        "and cultural education for Muslim communities, supporting their spiritual "
        "and educational needs."
    ),
    criteria=(
        Criterion(
            "muslim_population", "Significant Muslim Population",
            "Muslim community requires religious education facility",
            4.0, _muslim_population,
        ),
        Criterion(
            "no_madrasah_exists", "No Madrasah Exists",
            "Community lacks Madrasah facility",
            3.0, _no_madrasah,
        ),
        Criterion(
            "madrasah_condition", "Poor Madrasah Condition",
            "Existing Madrasah needs rehabilitation",
            2.0, _madrasah_condition,
        ),
        Criterion(
            "distance_to_madrasah", "Distance to Nearest Madrasah",
            "Far distance to nearest facility",
            1.0, _madrasah_distance,
        ),
    ),
)


# ── School building ───────────────────────────────────────────────────────────

_CLASSROOM_CROWDING: dict[StudentsPerRoom, CriterionResult] = {
    StudentsPerRoom.NO_CLASSROOM: CriterionResult(3.5, "No classroom available in sitio"),
    StudentsPerRoom.MORE_THAN_56: CriterionResult(
        3.0, "Severely overcrowded classrooms (>56 students per room)"
    ),
    StudentsPerRoom.FROM_51_TO_55: CriterionResult(
        2.0, "Overcrowded classrooms (51-55 students per room)"
    ),
    StudentsPerRoom.FROM_46_TO_50: CriterionResult(
        1.0, "Moderately crowded classrooms (46-50 students per room)"
    ),
}


def _insufficient_classrooms(profile: CommunityProfile) -> CriterionResult:
    return _CLASSROOM_CROWDING.get(
        profile.students_per_room, CriterionResult(0.0, "Classrooms are sufficient")
    )


def _no_elementary_school(profile: CommunityProfile) -> CriterionResult:
    if profile.facilities.elementary_school.exists == "no":
        return CriterionResult(2.5, "No elementary school exists in sitio")
    return CriterionResult(0.0, "Elementary school exists")


def _school_condition(profile: CommunityProfile) -> CriterionResult:
    school = profile.facilities.elementary_school
    if school.exists == "yes" and school.condition == 1:
        return CriterionResult(2.0, "Elementary school is unsafe and needs replacement")
    if school.exists == "yes" and school.condition == 2:
        return CriterionResult(1.5, "Elementary school requires immediate repair")
    return CriterionResult(0.0, "School facility in acceptable condition")


def _children_not_attending(profile: CommunityProfile) -> CriterionResult:
    osy = profile.vulnerable_groups.out_of_school_youth
    if osy >= 30:
        return CriterionResult(1.5, f"{osy} out-of-school youth in community")
    if osy >= 15:
        return CriterionResult(1.0, f"{osy} out-of-school youth present")
    if osy > 0:
        return CriterionResult(0.5, f"{osy} out-of-school youth present")
    return CriterionResult(0.0, "No out-of-school youth reported")


def _school_distance(profile: CommunityProfile) -> CriterionResult:
    school = profile.facilities.elementary_school
    distance = school.distance_to_nearest
    if school.exists == "no" and distance and distance >= 3:
        return CriterionResult(0.5, f"Nearest school is {format_number(distance)}km away")
    return CriterionResult(0.0, "School exists or is nearby")


SCHOOL_BUILDING_CONFIG = PPAConfig(
    id="school-building",
    name="Construction of School Building",
    category=PPACategory.INFRASTRUCTURE,
    description=(
        "Construction of new school buildings or additional classrooms to address "
        "overcrowding, improve access to education, and provide safe learning "
        "environments for school-age children."
    ),
    criteria=(
        Criterion(
            "insufficient_classrooms", "Insufficient Classrooms",
            "Classrooms not enough for student population",
            3.5, _insufficient_classrooms,
        ),
        Criterion(
            "no_elementary", "No Elementary School",
            "Sitio lacks elementary school",
            2.5, _no_elementary_school,
        ),
        Criterion(
            "poor_school_condition", "Poor School Facility Condition",
            "Existing school in poor/critical condition",
            2.0, _school_condition,
        ),
        Criterion(
            "many_children_not_attending", "Out of School Youth Present",
            "School-age children not attending school",
            1.5, _children_not_attending,
        ),
        Criterion(
            "distance_to_school", "Distance to Nearest School",
            "Students must travel far to attend school",
            0.5, _school_distance,
        ),
    ),
)


# ── Solar street lights ───────────────────────────────────────────────────────

def _street_lights_priority(profile: CommunityProfile) -> CriterionResult:
    rating = priority_rating(profile, PriorityName.SOLAR_STREET_LIGHTS)
    if rating == 3:
        return CriterionResult(4.0, "Street lights are a very urgent priority")
    if rating == 2:
        return CriterionResult(2.5, "Street lights are a moderate priority")
    if rating == 1:
        return CriterionResult(1.0, "Street lights are a low priority need")
    return CriterionResult(0.0, "Street lights not identified as a priority")


def _no_grid_electricity(profile: CommunityProfile) -> CriterionResult:
    if not profile.electricity_sources.grid:
        return CriterionResult(2.5, "Not connected to main power grid - solar ideal")
    return CriterionResult(0.0, "Connected to power grid")


def _low_electrification(profile: CommunityProfile) -> CriterionResult:
    rate = coverage_pct(profile.households_with_electricity, profile.total_households)
    if rate is None:
        return CriterionResult(0.0, _NO_HOUSEHOLD_DATA)
    if rate < 25:
        return CriterionResult(
            2.0, f"Only {format_percent(rate)}% of households have electricity"
        )
    if rate < 50:
        return CriterionResult(1.0, f"{format_percent(rate)}% household electrification")
    return CriterionResult(0.0, "Majority of households have electricity")


def _lighting_safety_concern(profile: CommunityProfile) -> CriterionResult:
    if profile.sitio_classification.conflict:
        return CriterionResult(1.0, "Conflict area - lighting improves safety")
    return CriterionResult(0.0, "No specific safety concerns")


def _footpath_needs_lighting(profile: CommunityProfile) -> CriterionResult:
    if profile.main_access.footpath:
        return CriterionResult(0.5, "Footpath access would benefit from lighting")
    return CriterionResult(0.0, "Not primarily footpath access")


SOLAR_STREET_LIGHTS_CONFIG = PPAConfig(
    id="solar-street-lights",
    name="Installation of Solar Street Lights",
    category=PPACategory.INFRASTRUCTURE,
    description=(
        "Installation of solar-powered street lighting systems to improve safety, "
        "security, and mobility during nighttime hours, particularly in areas "
        "without grid electricity access."
    ),
    criteria=(
        Criterion(
            "no_street_lights", "Street Lights Priority Need",
            "Community prioritizes street lighting",
            4.0, _street_lights_priority,
        ),
        Criterion(
            "no_grid_electricity", "No Grid Electricity",
            "Sitio not connected to power grid",
            2.5, _no_grid_electricity,
        ),
        Criterion(
            "low_electrification", "Low Household Electrification",
            "Few households have electricity",
            2.0, _low_electrification,
        ),
        Criterion(
            "safety_concern", "Safety and Security Concern",
            "Conflict or safety issues that lighting would address",
            1.0, _lighting_safety_concern,
        ),
        Criterion(
            "footpath_access_lights", "Footpath Access Needs Lighting",
            "Footpaths would benefit from lighting",
            0.5, _footpath_needs_lighting,
        ),
    ),
)


# ── Sanitary toilet facilities ────────────────────────────────────────────────

def _open_defecation(profile: CommunityProfile) -> CriterionResult:
    if profile.sanitation_types.open_defecation:
        return CriterionResult(4.0, "Open defecation is practiced - critical health risk")
    return CriterionResult(0.0, "No open defecation reported")


def _low_toilet_coverage(profile: CommunityProfile) -> CriterionResult:
    coverage = coverage_pct(profile.households_with_toilet, profile.total_households)
    if coverage is None:
        return CriterionResult(0.0, _NO_HOUSEHOLD_DATA)
    if coverage < 25:
        return CriterionResult(3.0, f"Only {format_percent(coverage)}% of households have toilets")
    if coverage < 50:
        return CriterionResult(2.0, f"{format_percent(coverage)}% toilet coverage")
    if coverage < 75:
        return CriterionResult(1.0, f"{format_percent(coverage)}% toilet coverage")
    return CriterionResult(0.0, "Majority of households have toilets")


def _no_community_toilet(profile: CommunityProfile) -> CriterionResult:
    if profile.facilities.community_toilet.exists == "no":
        return CriterionResult(1.5, "No community toilet exists")
    return CriterionResult(0.0, "Community toilet exists")


def _flood_sanitation_risk(profile: CommunityProfile) -> CriterionResult:
    if profile.hazards.flood.frequency > 0:
        return CriterionResult(1.0, "Flooding risk indicates potential sanitation health issues")
    return CriterionResult(0.0, "No flood-related health concerns")


def _pit_latrine_reliance(profile: CommunityProfile) -> CriterionResult:
    sanitation = profile.sanitation_types
    if sanitation.pit_latrine and not sanitation.water_sealed:
        return CriterionResult(0.5, "Pit latrines used - upgrading to sealed toilets needed")
    return CriterionResult(0.0, "Water-sealed toilets or better in use")


SANITARY_TOILET_CONFIG = PPAConfig(
    id="sanitary-toilet",
    name="Construction of Sanitary Toilet Facilities",
    category=PPACategory.INFRASTRUCTURE,
    description=(
        "Construction of household or communal sanitary toilet facilities to "
        "eliminate open defecation, improve public health, and reduce waterborne "
        "disease transmission."
    ),
    criteria=(
        Criterion(
            "open_defecation", "Open Defecation Practice",
            "Community practices open defecation",
            4.0, _open_defecation,
        ),
        Criterion(
            "low_toilet_coverage", "Low Toilet Ownership",
            "Few households have own toilet facilities",
            3.0, _low_toilet_coverage,
        ),
        Criterion(
            "no_comfort_room", "No Community Toilet",
            "Lack of communal sanitation facility",
            1.5, _no_community_toilet,
        ),
        Criterion(
            "waterborne_health", "Flood Risk Indicates Health Concerns",
            "Flooding can contribute to sanitation issues",
            1.0, _flood_sanitation_risk,
        ),
        Criterion(
            "pit_latrine_use", "Pit Latrine Predominance",
            "Community relies on pit latrines",
            0.5, _pit_latrine_reliance,
        ),
    ),
)


# ── Slope protection / box culverts ───────────────────────────────────────────

def _flooding_risk(profile: CommunityProfile) -> CriterionResult:
    if profile.hazards.flood.frequency > 0:
        return CriterionResult(3.5, "Flooding is a common risk in the area")
    return CriterionResult(0.0, "No significant flooding risk")


def _landslide_risk(profile: CommunityProfile) -> CriterionResult:
    if profile.hazards.landslide.frequency > 0:
        return CriterionResult(3.0, "Landslides are a common risk - slope protection needed")
    return CriterionResult(0.0, "No landslide risk")


def _access_route_vulnerability(profile: CommunityProfile) -> CriterionResult:
    worst = worst_road_condition(profile)
    hazard = profile.hazards.flood.frequency > 0 or profile.hazards.landslide.frequency > 0
    if worst is not None and worst <= 2 and hazard:
        return CriterionResult(2.0, "Poor roads compound flood/landslide impacts on access")
    return CriterionResult(0.0, "Roads not particularly vulnerable")


def _water_crossing_need(profile: CommunityProfile) -> CriterionResult:
    if profile.main_access.boat:
        return CriterionResult(1.0, "Boat access indicates need for river crossings/culverts")
    return CriterionResult(0.0, "No water-based access")


def _flooded_farmland(profile: CommunityProfile) -> CriterionResult:
    if profile.hazards.flood.frequency > 0 and profile.agriculture.number_of_farmers > 0:
        return CriterionResult(0.5, "Flooding impacts agricultural livelihoods")
    return CriterionResult(0.0, "No flooding impact on agriculture")


SLOPE_PROTECTION_CONFIG = PPAConfig(
    id="slope-protection",
    name="Construction of Slope Protection / Box Culverts",
    category=PPACategory.INFRASTRUCTURE,
    description=(
        "Installation of slope protection structures and drainage systems to "
        "mitigate flooding and landslide risks, protecting infrastructure and "
        "agricultural areas from natural disasters."
    ),
    criteria=(
        Criterion(
            "flooding_risk", "Flooding Risk",
            "Area experiences regular flooding",
            3.5, _flooding_risk,
        ),
        Criterion(
            "landslide_risk", "Landslide Risk",
            "Area prone to landslides needing slope protection",
            3.0, _landslide_risk,
        ),
        Criterion(
            "access_vulnerability", "Access Route Vulnerability",
            "Roads affected by weather events",
            2.0, _access_route_vulnerability,
        ),
        Criterion(
            "boat_access", "Water-Based Access",
            "Boat access indicates need for water crossings",
            1.0, _water_crossing_need,
        ),
        Criterion(
            "agricultural_impact", "Agricultural Area Impact",
            "Flooding affects farming community",
            0.5, _flooded_farmland,
        ),
    ),
)


INFRASTRUCTURE_CONFIGS: tuple[PPAConfig, ...] = (
    POTABLE_WATER_SYSTEM_CONFIG,
    CONCRETE_TIRE_PATH_CONFIG,
    ROAD_OPENING_CONFIG,
    COMMUNITY_HUB_CONFIG,
    MADRASAH_FACILITY_CONFIG,
    SCHOOL_BUILDING_CONFIG,
    SOLAR_STREET_LIGHTS_CONFIG,
    SANITARY_TOILET_CONFIG,
    SLOPE_PROTECTION_CONFIG,
)
