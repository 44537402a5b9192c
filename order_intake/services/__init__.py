"""Pipeline services: intake filter, line validator, request builder,
orchestration and the approval workflow helpers."""
