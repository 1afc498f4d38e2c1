class RBThread:
    def __init__(
        self,
        id: int | None = None,
        category_id: int | None = None,
        author_id: int | None = None,
        locked: bool | None = None,
        pinned: bool | None = None,
    ):
        self.id = id
        self.category_id = category_id
        self.author_id = author_id
        self.locked = locked
        self.pinned = pinned

    def to_dict(self) -> dict:
        return {
            key: value for key, value in {
                "id": self.id,
                "category_id": self.category_id,
                "author_id": self.author_id,
                "locked": self.locked,
                "pinned": self.pinned,
            }.items() if value is not None
        }
