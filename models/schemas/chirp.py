from marshmallow import Schema, fields, validate, post_load

from models.chirp import MAX_CHIRP_LENGTH
from utils.profanity import clean_body


class ChirpBodySchema(Schema):
    body = fields.String(
        required=True,
        validate=[
            validate.Length(min=1, error="Chirp body is required."),
            validate.Length(max=MAX_CHIRP_LENGTH, error="Chirp is too long."),
        ],
    )


class ChirpCreateSchema(ChirpBodySchema):
    @post_load
    def _clean(self, data, **kwargs):
        # Only the masked text is persisted
        data["body"], _ = clean_body(data["body"])
        return data


class ChirpOutSchema(Schema):
    id = fields.String(dump_only=True)
    body = fields.String()
    user_id = fields.String()
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)
