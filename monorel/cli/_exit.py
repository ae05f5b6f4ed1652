OK = 0
VALIDATION_ERR = 1
USER_ERR = 2
INTERNAL = 3
