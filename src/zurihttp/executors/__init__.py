# Re-export HTTPExecutor for easy access
from .http_exec import HTTPExecutor, MissingParameterError
