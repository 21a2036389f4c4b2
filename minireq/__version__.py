__title__ = "minireq"
__description__ = "A small GET/POST/PUT convenience layer over httpx."
__version__ = "0.1.0"
