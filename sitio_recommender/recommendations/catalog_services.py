"""
Built-in Service Delivery & Social PPA configurations.

Six program / activity candidates: service caravan, civil registration,
supplemental feeding, livelihood assistance, agricultural inputs and social
preparation.  Same conventions as ``catalog_infrastructure``.

Income thresholds are daily household income in pesos.
"""

from __future__ import annotations

from sitio_recommender.models.profile import CommunityProfile
from sitio_recommender.recommendations.criteria import (
    Criterion,
    CriterionResult,
    PPAConfig,
)
from sitio_recommender.recommendations.indicators import (
    coverage_pct,
    format_number,
    format_percent,
    has_functional_improved_water,
    has_paved_roads,
    priority_rating,
    total_population,
)
from sitio_recommender.taxonomy.ppa_taxonomy import FoodSecurity, PPACategory, PriorityName


# ── Convergence service caravan ───────────────────────────────────────────────

def _caravan_no_health_center(profile: CommunityProfile) -> CriterionResult:
    if profile.facilities.health_center.exists == "no":
        return CriterionResult(2.5, "No health center - mobile services critical")
    return CriterionResult(0.0, "Health center exists")


def _health_center_distance(profile: CommunityProfile) -> CriterionResult:
    center = profile.facilities.health_center
    distance = center.distance_to_nearest
    if center.exists == "no" and distance:
        if distance >= 5:
            return CriterionResult(
                2.0, f"Nearest health center is {format_number(distance)}km away"
            )
        if distance >= 2:
            return CriterionResult(1.0, f"Health center is {format_number(distance)}km away")
    return CriterionResult(0.0, "Health center nearby")


def _count_risk_factors(profile: CommunityProfile) -> int:
    hazards = profile.hazards
    return sum((
        hazards.flood.frequency > 0,
        hazards.landslide.frequency > 0,
        hazards.drought.frequency > 0,
        profile.food_security in (FoodSecurity.CRITICAL_SHORTAGE, FoodSecurity.SEASONAL_SCARCITY),
        profile.sitio_classification.conflict,
    ))


def _multiple_risk_factors(profile: CommunityProfile) -> CriterionResult:
    concerns = _count_risk_factors(profile)
    if concerns >= 3:
        return CriterionResult(2.0, f"{concerns} different risk factors identified")
    if concerns >= 2:
        return CriterionResult(1.0, f"{concerns} risk factors identified")
    return CriterionResult(0.0, "Few risk factors")


def _caravan_population(profile: CommunityProfile) -> CriterionResult:
    population = total_population(profile)
    if population >= 500:
        return CriterionResult(1.5, f"Large population ({population}) needs mobile services")
    if population >= 250:
        return CriterionResult(1.0, f"Moderate population ({population}) would benefit")
    return CriterionResult(0.0, "Small population")


def _caravan_gida_area(profile: CommunityProfile) -> CriterionResult:
    if profile.sitio_classification.gida:
        return CriterionResult(1.0, "GIDA area benefits from mobile service delivery")
    return CriterionResult(0.0, "Not GIDA")


def _gida_and_indigenous(profile: CommunityProfile) -> CriterionResult:
    classification = profile.sitio_classification
    if classification.gida and classification.indigenous:
        return CriterionResult(1.0, "GIDA and Indigenous community - service caravan priority")
    return CriterionResult(0.0, "Standard community")


SERVICE_CARAVAN_CONFIG = PPAConfig(
    id="service-caravan",
    name="Conduct of Convergence Service Caravan",
    category=PPACategory.SERVICE_DELIVERY,
    description=(
        "Mobile delivery of essential government services including health "
        "consultations, vaccinations, and social welfare programs to remote or "
        "underserved communities with limited access to regular service facilities."
    ),
    criteria=(
        Criterion(
            "no_health_center", "No Health Center",
            "Sitio lacks health facility",
            2.5, _caravan_no_health_center,
        ),
        Criterion(
            "health_distance", "Distance to Health Services",
            "Far from health facilities",
            2.0, _health_center_distance,
        ),
        Criterion(
            "health_concerns_multiple", "Multiple Risk Factors",
            "Various hazards and food security concerns present",
            2.0, _multiple_risk_factors,
        ),
        Criterion(
            "large_population_services", "Large Population to Serve",
            "Many residents need services",
            1.5, _caravan_population,
        ),
        Criterion(
            "gida_services", "GIDA Area",
            "Remote area needs mobile services",
            1.0, _caravan_gida_area,
        ),
        Criterion(
            "first_visit", "GIDA or Indigenous Community",
            "Priority service delivery for underserved communities",
            1.0, _gida_and_indigenous,
        ),
    ),
)


# ── Civil registry & national ID ──────────────────────────────────────────────

def _unregistered_births(profile: CommunityProfile) -> CriterionResult:
    count = profile.vulnerable_groups.no_birth_cert_count
    if count >= 50:
        return CriterionResult(4.0, f"{count} individuals without birth certificates")
    if count >= 20:
        return CriterionResult(3.0, f"{count} without birth certificates")
    if count >= 10:
        return CriterionResult(2.0, f"{count} without birth certificates")
    if count > 0:
        return CriterionResult(1.0, f"{count} without birth certificates")
    return CriterionResult(0.0, "All births appear registered")


def _missing_national_id(profile: CommunityProfile) -> CriterionResult:
    count = profile.vulnerable_groups.no_national_id_count
    for floor, points in ((100, 3.5), (50, 2.5), (20, 1.5)):
        if count >= floor:
            return CriterionResult(points, f"{count} adults without National ID")
    if count > 0:
        return CriterionResult(0.5, f"{count} adults without National ID")
    return CriterionResult(0.0, "Most adults have National ID")


def _gida_documentation_gap(profile: CommunityProfile) -> CriterionResult:
    if profile.sitio_classification.gida:
        return CriterionResult(1.5, "GIDA area likely has documentation gaps")
    return CriterionResult(0.0, "Not GIDA")


def _ip_documentation_barriers(profile: CommunityProfile) -> CriterionResult:
    if profile.sitio_classification.indigenous:
        return CriterionResult(1.0, "Indigenous community may face documentation barriers")
    return CriterionResult(0.0, "Not an IP community")


CIVIL_REGISTRY_CONFIG = PPAConfig(
    id="civil-registry",
    name="Civil Registry & National ID Registration",
    category=PPACategory.SERVICE_DELIVERY,
    description=(
        "Facilitation of birth registration and national identification card "
        "(PhilSys) enrollment to ensure legal identity documentation, enabling "
        "access to government services and social programs."
    ),
    criteria=(
        Criterion(
            "unregistered_births_high", "High Unregistered Births",
            "Many individuals lack birth certificates",
            4.0, _unregistered_births,
        ),
        Criterion(
            "no_philsys_id", "Lack of National ID",
            "Adults without PhilSys ID",
            3.5, _missing_national_id,
        ),
        Criterion(
            "gida_documentation", "GIDA Area Documentation Gap",
            "Remote areas often have documentation gaps",
            1.5, _gida_documentation_gap,
        ),
        Criterion(
            "ip_community_docs", "Indigenous People Community",
            "IP communities often face documentation barriers",
            1.0, _ip_documentation_barriers,
        ),
    ),
)


# ── Supplemental feeding program ──────────────────────────────────────────────

def _malnutrition_risk(profile: CommunityProfile) -> CriterionResult:
    if profile.food_security == FoodSecurity.CRITICAL_SHORTAGE:
        return CriterionResult(5.0, "Critical food shortage - high malnutrition risk")
    if profile.food_security == FoodSecurity.SEASONAL_SCARCITY:
        return CriterionResult(3.0, "Seasonal food scarcity - malnutrition concern")
    return CriterionResult(0.0, "Food security adequate")


def _seasonal_food_insecurity(profile: CommunityProfile) -> CriterionResult:
    if profile.food_security == FoodSecurity.SEASONAL_SCARCITY:
        return CriterionResult(2.5, "Seasonal food scarcity reported")
    return CriterionResult(0.0, "No food insecurity reported")


def _feeding_income_level(profile: CommunityProfile) -> CriterionResult:
    income = profile.average_daily_income
    if 0 < income < 200:
        return CriterionResult(
            1.5, f"Average daily income ₱{format_number(income)} indicates extreme poverty"
        )
    if 200 <= income < 350:
        return CriterionResult(
            1.0, f"Average daily income ₱{format_number(income)} below poverty line"
        )
    return CriterionResult(0.0, "Income above poverty threshold")


def _conflict_food_disruption(profile: CommunityProfile) -> CriterionResult:
    if profile.sitio_classification.conflict:
        return CriterionResult(1.0, "Conflict impacts food security")
    return CriterionResult(0.0, "No recent conflict")


FEEDING_PROGRAM_CONFIG = PPAConfig(
    id="feeding-program",
    name="Implementation of Supplemental Feeding Program",
    category=PPACategory.SERVICE_DELIVERY,
    description=(
        "Provision of nutritional supplementation programs to address malnutrition "
        "and food insecurity, particularly targeting children and vulnerable "
        "populations in poverty-stricken or conflict-affected areas."
    ),
    criteria=(
        Criterion(
            "malnutrition_concern", "Food Security Critical",
            "Critical food shortage indicates malnutrition risk",
            5.0, _malnutrition_risk,
        ),
        Criterion(
            "food_insecurity", "Food Insecurity Risk",
            "Community faces food insecurity",
            2.5, _seasonal_food_insecurity,
        ),
        Criterion(
            "extreme_poverty", "Low Income Community",
            "Low average daily income indicates poverty",
            1.5, _feeding_income_level,
        ),
        Criterion(
            "conflict_feeding", "Conflict-Affected Area",
            "Conflict disrupts food security",
            1.0, _conflict_food_disruption,
        ),
    ),
)


# ── Livelihood assistance & skills training ───────────────────────────────────

def _unemployment_rate(profile: CommunityProfile) -> CriterionResult:
    rate = coverage_pct(profile.vulnerable_groups.unemployed_count, profile.labor_force_count)
    if rate is None:
        return CriterionResult(0.0, "No labor force data")
    if rate >= 30:
        return CriterionResult(3.0, f"{format_percent(rate)}% unemployment rate")
    if rate >= 20:
        return CriterionResult(2.0, f"{format_percent(rate)}% unemployment")
    if rate >= 10:
        return CriterionResult(1.0, f"{format_percent(rate)}% unemployment")
    return CriterionResult(0.0, "Low unemployment")


def _livelihood_income_level(profile: CommunityProfile) -> CriterionResult:
    income = profile.average_daily_income
    shown = format_number(income)
    if 0 < income < 150:
        return CriterionResult(2.5, f"Average daily income ₱{shown} indicates severe poverty")
    if 150 <= income < 250:
        return CriterionResult(1.5, f"Average daily income ₱{shown} indicates poverty")
    if 250 <= income < 350:
        return CriterionResult(0.5, f"Average daily income ₱{shown} below median")
    return CriterionResult(0.0, "Income above poverty threshold")


def _out_of_school_youth_training(profile: CommunityProfile) -> CriterionResult:
    osy = profile.vulnerable_groups.out_of_school_youth
    if osy >= 30:
        return CriterionResult(2.0, f"{osy} Out of School Youth need training")
    if osy >= 15:
        return CriterionResult(1.5, f"{osy} OSY need skills development")
    if osy > 0:
        return CriterionResult(1.0, f"{osy} OSY present")
    return CriterionResult(0.0, "No OSY reported")


def _farm_tools_livelihood_priority(profile: CommunityProfile) -> CriterionResult:
    rating = priority_rating(profile, PriorityName.FARM_TOOLS)
    if rating >= 2 and profile.agriculture.number_of_farmers > 0:
        return CriterionResult(1.5, "Farming community prioritizes livelihood support")
    return CriterionResult(0.0, "Livelihood support not a priority")


def _self_employment_potential(profile: CommunityProfile) -> CriterionResult:
    if profile.worker_class.self_employed:
        return CriterionResult(1.0, "Self-employed workers - capital assistance would help")
    return CriterionResult(0.0, "No self-employment activity")


LIVELIHOOD_ASSISTANCE_CONFIG = PPAConfig(
    id="livelihood-assistance",
    name="Provision of Livelihood Assistance & Skills Training",
    category=PPACategory.SERVICE_DELIVERY,
    description=(
        "Skills training and livelihood support programs to reduce unemployment, "
        "enhance income-generating capabilities, and provide economic "
        "opportunities for out-of-school youth and underemployed community members."
    ),
    criteria=(
        Criterion(
            "high_unemployment", "High Unemployment",
            "Significant unemployment in labor force",
            3.0, _unemployment_rate,
        ),
        Criterion(
            "poverty_level", "High Poverty Levels",
            "Low average daily income indicates poverty",
            2.5, _livelihood_income_level,
        ),
        Criterion(
            "out_of_school_youth", "Out of School Youth",
            "OSY need skills training",
            2.0, _out_of_school_youth_training,
        ),
        Criterion(
            "no_livelihood_support", "Farm Tools Priority Need",
            "Community prioritizes farm tools/support",
            1.5, _farm_tools_livelihood_priority,
        ),
        Criterion(
            "trading_opportunity", "Self-Employment/Trading Potential",
            "Self-employed workers exist who could benefit",
            1.0, _self_employment_potential,
        ),
    ),
)


# ── Agricultural inputs ───────────────────────────────────────────────────────

def _farming_livelihood(profile: CommunityProfile) -> CriterionResult:
    farmers = profile.agriculture.number_of_farmers
    if farmers >= 50:
        return CriterionResult(3.0, f"{farmers} farmers rely on agriculture")
    if farmers >= 20:
        return CriterionResult(2.0, f"{farmers} farmers in community")
    if farmers > 0:
        return CriterionResult(1.0, "Farming is a livelihood source")
    return CriterionResult(0.0, "Not primarily agricultural")


def _farm_inputs_priority(profile: CommunityProfile) -> CriterionResult:
    rating = priority_rating(profile, PriorityName.FARM_TOOLS)
    has_farmers = profile.agriculture.number_of_farmers > 0
    if rating == 3 and has_farmers:
        return CriterionResult(2.5, "Farm tools/inputs are a very urgent priority")
    if rating == 2 and has_farmers:
        return CriterionResult(1.5, "Farm tools/inputs are a moderate priority")
    return CriterionResult(0.0, "Farm inputs not a priority")


def _farming_community_size(profile: CommunityProfile) -> CriterionResult:
    farmers = profile.agriculture.number_of_farmers
    if farmers >= 30:
        return CriterionResult(2.0, "Large farming community would benefit from tools")
    if farmers >= 10:
        return CriterionResult(1.0, "Farming community would benefit from tools")
    return CriterionResult(0.0, "Small farming presence")


def _farm_area(profile: CommunityProfile) -> CriterionResult:
    area = profile.agriculture.estimated_farm_area_hectares
    for floor, points in ((100, 1.5), (50, 1.0), (20, 0.5)):
        if area >= floor:
            return CriterionResult(points, f"{format_number(area)} hectares of farmland")
    return CriterionResult(0.0, "Small farming area")


def _farmers_organization(profile: CommunityProfile) -> CriterionResult:
    associations = profile.agriculture.number_of_associations
    if associations >= 1:
        return CriterionResult(
            1.0, f"{associations} farmers association(s) can distribute inputs"
        )
    return CriterionResult(0.0, "No farmers organization")


AGRICULTURAL_INPUTS_CONFIG = PPAConfig(
    id="agricultural-inputs",
    name="Distribution of Agricultural Inputs",
    category=PPACategory.SERVICE_DELIVERY,
    description=(
        "Distribution of seeds, fertilizers, and farm tools to support agricultural "
        "communities, improve crop productivity, and enhance food security for "
        "farming-dependent populations."
    ),
    criteria=(
        Criterion(
            "farming_livelihood", "Farming as Primary Livelihood",
            "Agriculture is main economic activity",
            3.0, _farming_livelihood,
        ),
        Criterion(
            "no_seeds_support", "Farm Tools Priority",
            "Farmers prioritize farm tools/inputs",
            2.5, _farm_inputs_priority,
        ),
        Criterion(
            "no_farm_tools", "Agricultural Community Needs",
            "Farming community would benefit from inputs",
            2.0, _farming_community_size,
        ),
        Criterion(
            "large_farm_area", "Significant Agricultural Land",
            "Large farming area to support",
            1.5, _farm_area,
        ),
        Criterion(
            "farmers_organization", "Farmers Organization Exists",
            "Organized farmers can better utilize inputs",
            1.0, _farmers_organization,
        ),
    ),
)


# ── Social preparation & site validation ──────────────────────────────────────

def _gida_consultation(profile: CommunityProfile) -> CriterionResult:
    if profile.sitio_classification.gida:
        return CriterionResult(4.0, "GIDA area - community consultation essential")
    return CriterionResult(0.0, "Standard community")


def _infrastructure_survey_needed(profile: CommunityProfile) -> CriterionResult:
    needs_infra = (
        not has_paved_roads(profile)
        or not has_functional_improved_water(profile.water_sources)
        or profile.facilities.health_center.exists == "no"
    )
    if needs_infra:
        return CriterionResult(2.5, "Major infrastructure needs require technical survey")
    return CriterionResult(0.0, "No major infrastructure needs")


def _indigenous_consultation(profile: CommunityProfile) -> CriterionResult:
    if profile.sitio_classification.indigenous:
        return CriterionResult(
            2.0, "Indigenous community requires culturally-appropriate consultation"
        )
    return CriterionResult(0.0, "Not an IP community")


def _conflict_peacebuilding(profile: CommunityProfile) -> CriterionResult:
    if profile.sitio_classification.conflict:
        return CriterionResult(1.5, "Conflict context requires careful community engagement")
    return CriterionResult(0.0, "No conflict context")


SOCIAL_PREPARATION_CONFIG = PPAConfig(
    id="social-preparation",
    name="Conduct of Social Preparation & Site Validation",
    category=PPACategory.SERVICE_DELIVERY,
    description=(
        "Community engagement, consultation, and site assessment activities to "
        "ensure culturally-appropriate project implementation, particularly for "
        "indigenous peoples and conflict-affected communities requiring sensitive "
        "social preparation."
    ),
    criteria=(
        Criterion(
            "first_visit_prep", "GIDA Area Requires Preparation",
            "GIDA areas require community consultation",
            4.0, _gida_consultation,
        ),
        Criterion(
            "infrastructure_planned", "Infrastructure Projects Needed",
            "Site validation required for infrastructure",
            2.5, _infrastructure_survey_needed,
        ),
        Criterion(
            "indigenous_consultation", "Indigenous People Community",
            "IP communities require culturally-sensitive engagement",
            2.0, _indigenous_consultation,
        ),
        Criterion(
            "conflict_peacebuilding", "Conflict-Affected Area",
            "Conflict areas need careful social preparation",
            1.5, _conflict_peacebuilding,
        ),
    ),
)


SERVICE_DELIVERY_CONFIGS: tuple[PPAConfig, ...] = (
    SERVICE_CARAVAN_CONFIG,
    CIVIL_REGISTRY_CONFIG,
    FEEDING_PROGRAM_CONFIG,
    LIVELIHOOD_ASSISTANCE_CONFIG,
    AGRICULTURAL_INPUTS_CONFIG,
    SOCIAL_PREPARATION_CONFIG,
)
