from marshmallow import Schema, fields, pre_load, validate

def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v

class UserCreateSchema(Schema):
    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data["email"] = _norm_email(data["email"])
        return data

class UserLoginSchema(Schema):
    email = fields.String(required=True)
    password = fields.String(required=True, load_only=True)
    expires_in_seconds = fields.Integer(load_default=None, allow_none=True)

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data["email"] = _norm_email(data["email"])
        return data

class UserUpdateSchema(UserCreateSchema):
    pass

class UserOutSchema(Schema):
    id = fields.String(dump_only=True)
    email = fields.String()
    is_chirpy_red = fields.Boolean()
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)
