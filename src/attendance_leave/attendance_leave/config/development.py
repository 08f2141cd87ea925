DEBUG = True

# Values used when the variable is absent from the environment.
ENV_DEFAULTS: dict = {}
