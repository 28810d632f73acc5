import threading


class Singleton(type):
    _instances: dict[type, object] = {}
    _lock = threading.Lock()  # guards instance creation across threads

    def __call__(cls, *args, **kwargs):
        instance = cls._instances.get(cls)
        if instance is not None:
            return instance
        with cls._lock:
            if cls not in cls._instances:
                cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]

    def reset(cls):
        """Drops the cached instance so the next call re-reads its sources (used by tests)."""
        with cls._lock:
            cls._instances.pop(cls, None)
