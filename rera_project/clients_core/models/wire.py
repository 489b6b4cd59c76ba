from ..exceptions import InvalidInput


class WireFieldsMixin:
    """
    Map the camelCase keys clients send and receive onto model fields.
    Subclasses list their writable fields in WIRE_FIELDS
    (wire name -> model attribute).
    """
    WIRE_FIELDS = {}

    @classmethod
    def from_wire(cls, payload):
        # Only a closed set of keys is accepted
        if not isinstance(payload, dict):
            raise InvalidInput("Payload must be an object")
        unknown = sorted(set(payload) - set(cls.WIRE_FIELDS))
        if unknown:
            raise InvalidInput(
                f"Unknown {cls.__name__} field(s): {', '.join(unknown)}")
        return {cls.WIRE_FIELDS[key]: value for key, value in payload.items()}

    def to_dict(self):
        data = {"id": self.pk, "userId": self.owner_id}
        for wire_name, attr in self.WIRE_FIELDS.items():
            data[wire_name] = getattr(self, attr)
        data["createdAt"] = self.created_at
        data["updatedAt"] = self.updated_at
        return data
