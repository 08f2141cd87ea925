DEBUG = False

ENV_DEFAULTS: dict = {}
