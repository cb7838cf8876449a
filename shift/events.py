"""Event names reserved by the framework itself."""

ERROR_DISPATCH = "error.dispatch"
ERROR_BOOTSTRAP = "error.bootstrap"
READY = "shift.ready"
