class ConcurrentUpdateError(Exception):
    """Raised when a version-checked write finds the row changed underneath it"""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} was modified concurrently")
