"""
Constants
Centralised storage for runner statuses, pagination limits and exit codes.
"""
VERSION = "1.0.0"

ONLINE_STATUS = "online"
STALE_STATUSES = ("stale", "offline")
RUNNING_JOB_STATUS = "running"

# Pagination is fixed to a single page
PER_PAGE = 100
PAGE = 1

AUTH_HEADER = "PRIVATE-TOKEN"
USER_AGENT = "gitlabctl"

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_TRANSPORT_ERROR = 10
EXIT_INTERRUPTED = 130

CONFIRM_ANSWER = "y"
