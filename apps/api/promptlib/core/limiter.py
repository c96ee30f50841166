from slowapi import Limiter
from slowapi.util import get_remote_address

# Single-process in-memory storage; multi-instance needs Redis later.
limiter = Limiter(key_func=get_remote_address)
