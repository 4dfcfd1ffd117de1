"""
JSON schemas for document validation.
Documents are checked before they are written to their collection.
"""

from typing import Dict, Any

import jsonschema
from jsonschema import validators
from bson import ObjectId


FILE_TYPES = ('folder', 'file', 'image')


def _is_object_id(checker, instance) -> bool:
    return isinstance(instance, ObjectId)


# Draft 7 validator that also understands native ObjectId values
DocumentValidator = validators.extend(
    jsonschema.Draft7Validator,
    type_checker=jsonschema.Draft7Validator.TYPE_CHECKER.redefine('objectId', _is_object_id),
)


FILE_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "_id": {"type": "objectId"},
        "userId": {"type": "objectId"},
        "name": {"type": "string", "minLength": 1},
        "type": {"enum": list(FILE_TYPES)},
        "isPublic": {"type": "boolean"},
        "parentId": {
            "anyOf": [
                {"type": "objectId"},
                {"type": "integer"}
            ]
        },
        "localPath": {"type": "string", "minLength": 1}
    },
    "required": ["userId", "name", "type", "isPublic", "parentId"],
    "additionalProperties": False,
    # Only content-backed records carry a path
    "if": {"properties": {"type": {"const": "folder"}}},
    "then": {"not": {"required": ["localPath"]}},
    "else": {"required": ["localPath"]}
}


def validate_file_document(document: Dict[str, Any]) -> None:
    """Validate a file metadata document against the schema"""
    DocumentValidator(FILE_JSON_SCHEMA).validate(document)


# Schema mapping for easy access
DOCUMENT_SCHEMAS = {
    'files': FILE_JSON_SCHEMA,
}

DOCUMENT_VALIDATORS = {
    'files': validate_file_document,
}
