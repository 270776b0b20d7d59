"""
horti_calc - Horticultural engineering calculation library.

Modules:
    nec_compliance  - NEC electrical checks for cultivation equipment
    hydraulics      - Irrigation pipe hydraulics and uniformity
    energy          - Greenhouse heating, cooling, lighting and CO2 demand
    nutrients       - Tomato fertigation targets and deficiency diagnosis

Reference data lives in nec_tables, hydraulic_data and nutrient_profiles.
"""

from .validation import InvalidInputError

from .nec_compliance import (
    ElectricalEquipment,
    NECCompliance,
    AmpacityCorrection,
    ConduitFillResult,
    VoltageDropResult,
    DemandLoadResult,
    CircuitDesign,
    check_branch_circuit_loading,
    get_equipment_grounding_conductor,
    check_motor_circuit_conductors,
    check_ac_equipment_protection,
    check_gfci_requirements,
    calculate_ampacity_correction,
    calculate_conduit_fill,
    calculate_voltage_drop_percentage,
    calculate_voltage_drop_impedance,
    perform_complete_compliance_check,
    select_overcurrent_device,
    select_conductor,
    get_conductor_ampacity,
    get_demand_factor,
    calculate_demand_load,
    conductor_size_rank,
    design_circuit,
)

from .hydraulic_data import (
    SoilProperties,
    PipeSpecifications,
    FittingLosses,
    SOIL_DATABASE,
    PIPE_SPECIFICATIONS,
    get_soil_properties,
    get_fitting_coefficient,
    make_fitting,
    build_pipe_specification,
)

from .hydraulics import (
    HydraulicCalculationParams,
    HydraulicAnalysisResult,
    WaterHammerResult,
    kinematic_viscosity_at,
    calculate_reynolds_number,
    classify_flow_regime,
    hazen_williams_friction_loss,
    calculate_friction_factor,
    darcy_weisbach_head_loss,
    calculate_minor_losses,
    calculate_wave_speed,
    calculate_water_hammer,
    calculate_distribution_uniformity,
    calculate_emission_uniformity,
    calculate_application_efficiency,
    calculate_application_rate,
    analyze_hydraulic_system,
)

from .energy import (
    GreenhouseSpecs,
    ClimateSetpoints,
    WeatherConditions,
    EnergyRates,
    EnergyRequirements,
    LightingResult,
    ThermalStorageResult,
    GLAZING_PROPERTIES,
    STORAGE_HEAT_CAPACITY,
    calculate_heat_loss,
    calculate_solar_heat_gain,
    calculate_evaporative_cooling,
    calculate_co2_requirements,
    calculate_lighting_requirements,
    calculate_thermal_storage,
    calculate_energy_demand,
)

from .nutrient_profiles import (
    NutrientProfile,
    NUTRIENT_PROFILES,
    NUTRIENTS,
    GROWTH_STAGES,
    get_profile,
)

from .nutrients import (
    PlantParameters,
    EnvironmentalConditions,
    ProductionTargets,
    NutrientRequirements,
    DeficiencyDiagnosis,
    NutrientCalculator,
    calculate_nutrient_requirements,
    diagnose_potential_deficiencies,
)

__version__ = "0.1.0"
