"""Shared fixtures: a small pet store document and a matching config."""

from __future__ import annotations

import copy
from typing import Any

import pytest
import structlog

from schemagen.config import parse_config


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

PETSTORE: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Pet Store", "version": "1.0.0"},
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "summary": "List all pets",
                "tags": ["pets"],
                "parameters": [
                    {"name": "limit", "in": "query", "schema": {"type": "integer", "format": "int32"}},
                ],
                "responses": {
                    "200": {
                        "description": "A list of pets",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pets"}}},
                    },
                },
            },
            "post": {
                "operationId": "createPet",
                "requestBody": {"$ref": "#/components/requestBodies/NewPetBody"},
                "responses": {
                    "201": {
                        "description": "Created",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}},
                    },
                },
            },
        },
        "/pets/{petId}": {
            "parameters": [{"$ref": "#/components/parameters/PetId"}],
            "get": {
                "operationId": "showPetById",
                "responses": {"200": {"$ref": "#/components/responses/PetResponse"}},
            },
            "delete": {
                "operationId": "deletePet",
                "responses": {"204": {"description": "Deleted"}},
            },
        },
        "/owners/{ownerId}": {
            "get": {
                "operationId": "showOwner",
                "responses": {
                    "200": {
                        "description": "An owner",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Owner"}}},
                    },
                },
            },
        },
        "/pets/{petId}/photo": {
            "get": {
                "operationId": "petPhoto",
                "responses": {
                    "200": {
                        "description": "The photo",
                        "content": {"image/png": {"schema": {"type": "string", "format": "binary"}}},
                    },
                },
            },
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "required": ["id", "name"],
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string"},
                    "tag": {"type": "string"},
                },
            },
            "Pets": {
                "type": "array",
                "items": {"$ref": "#/components/schemas/Pet"},
            },
            "NewPet": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string", "minLength": 1, "maxLength": 64},
                    "tag": {"type": "string"},
                },
            },
            "Owner": {
                "type": "object",
                "description": "Someone with pets",
                "properties": {
                    "name": {"type": "string"},
                    "pets": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}},
                },
            },
        },
        "parameters": {
            "PetId": {"name": "petId", "in": "path", "required": True, "schema": {"type": "string"}},
        },
        "requestBodies": {
            "NewPetBody": {
                "required": True,
                "content": {"application/json": {"schema": {"$ref": "#/components/schemas/NewPet"}}},
            },
        },
        "responses": {
            "PetResponse": {
                "description": "A pet",
                "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}},
            },
        },
    },
}

CONFIG: dict[str, Any] = {
    "types": {
        "String": {"default": "String", "format": {"Date": "DateTime", "DateTime": "DateTime"}},
        "Integer": {"default": "number", "format": {"Int32": "int", "Int64": "long"}},
        "Number": {"default": "double"},
        "Boolean": {"default": "bool"},
        "PetObject": {"default": "Pet"},
        "NewPetObject": {"default": "NewPet"},
        "OwnerObject": {"default": "Owner"},
    },
    "extended": {"package": "petstore"},
    "array_layout": "List<{type}>",
    "model_file_name": "{{ name | snake_case }}.txt",
}


@pytest.fixture
def petstore() -> dict[str, Any]:
    """A fresh copy of the pet store document."""
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def config():
    return parse_config(copy.deepcopy(CONFIG))


# ---------------------------------------------------------------------------
# Logging: tests that run the CLI reconfigure structlog; undo it afterwards
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
