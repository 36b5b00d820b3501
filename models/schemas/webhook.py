from marshmallow import Schema, fields, EXCLUDE

USER_UPGRADED = "user.upgraded"


class WebhookDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    # Kept as a string; an id that is not a UUID cannot name a user (404)
    user_id = fields.String(required=True)


class WebhookEventSchema(Schema):
    """Payload posted by Polka when a payment event happens."""
    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    data = fields.Nested(WebhookDataSchema, load_default=dict)
