"""Retry utilities with exponential backoff"""
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type


def file_retry():
    """Retry decorator for filesystem replace/rename operations"""
    return retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
