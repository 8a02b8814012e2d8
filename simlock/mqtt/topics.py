"""MQTT topic constants and helpers."""


class Topics:
    """MQTT topic layout for served things."""

    THING_PROPERTIES = "simlock/things/{device_id}/properties"
    THING_ACTIONS = "simlock/things/{device_id}/actions"
    THING_ACTION_STATUS = "simlock/things/{device_id}/actions/status"

    @staticmethod
    def thing_properties(device_id: str) -> str:
        return Topics.THING_PROPERTIES.format(device_id=device_id)

    @staticmethod
    def thing_actions(device_id: str) -> str:
        return Topics.THING_ACTIONS.format(device_id=device_id)

    @staticmethod
    def thing_action_status(device_id: str) -> str:
        return Topics.THING_ACTION_STATUS.format(device_id=device_id)
