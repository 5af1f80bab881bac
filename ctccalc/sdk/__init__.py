"""CTC Calc SDK - Core functionality for CTC breakdowns and assignments."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_profile_path,
    load_profile,
    get_profile_value,
    get_ctc_defaults,
    get_data_path,
    ProfileNotFoundError,
    ProfileInvalidError,
)

from .schemas import (
    CompensationInput,
    CompensationBreakdown,
    ComponentConfig,
    ComponentSetting,
    Applicability,
    ManualOverrides,
    Salaried,
    Hourly,
    EmployeeProfile,
    CtcRecord,
    CtcDefaults,
)

from .ctc import (
    compute_breakdown,
    CtcSession,
)

from .records import (
    build_ctc_record,
    commit_ctc_assignment,
    validate_commit,
    save_ctc_record,
    list_ctc_records,
    get_ctc_record,
    latest_ctc_record,
    remove_ctc_record,
    CommitValidationError,
)

from .employee import (
    get_employee,
    list_employees,
    employment_for,
    suggested_range,
    check_suggested_range,
    EmployeeNotFoundError,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_profile_path",
    "load_profile",
    "get_profile_value",
    "get_ctc_defaults",
    "get_data_path",
    "ProfileNotFoundError",
    "ProfileInvalidError",
    # Schemas
    "CompensationInput",
    "CompensationBreakdown",
    "ComponentConfig",
    "ComponentSetting",
    "Applicability",
    "ManualOverrides",
    "Salaried",
    "Hourly",
    "EmployeeProfile",
    "CtcRecord",
    "CtcDefaults",
    # Engine
    "compute_breakdown",
    "CtcSession",
    # Records
    "build_ctc_record",
    "commit_ctc_assignment",
    "validate_commit",
    "save_ctc_record",
    "list_ctc_records",
    "get_ctc_record",
    "latest_ctc_record",
    "remove_ctc_record",
    "CommitValidationError",
    # Employee directory
    "get_employee",
    "list_employees",
    "employment_for",
    "suggested_range",
    "check_suggested_range",
    "EmployeeNotFoundError",
]
