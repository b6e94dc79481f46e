"""Built-in catalogue of TypeScript type concepts and their relationships."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typegraph.core.models import Category, Relationship, TypeKind

if TYPE_CHECKING:
    from typegraph.core.store import GraphStore

# (id, name, complexity, description, examples, documentation)
PRIMITIVES = [
    (
        "string", "string", 1,
        "Primitive string type for text data",
        ['"hello"', "'world'", "`template ${string}`"],
        "The string primitive type represents textual data.",
    ),
    (
        "number", "number", 1,
        "Primitive number type for numeric data",
        ["42", "3.14", "0xff", "1e10", "NaN", "Infinity"],
        "The number primitive type represents both integers and floating-point numbers.",
    ),
    (
        "boolean", "boolean", 1,
        "Primitive boolean type for true/false values",
        ["true", "false"],
        "The boolean primitive type represents logical true/false values.",
    ),
    (
        "null", "null", 1,
        "Represents intentional absence of value",
        ["null"],
        "The null type represents the intentional absence of any object value.",
    ),
    (
        "undefined", "undefined", 1,
        "Represents uninitialized or missing value",
        ["undefined"],
        "The undefined type represents a variable that has been declared "
        "but not assigned a value.",
    ),
    (
        "void", "void", 1,
        "Represents the absence of a return value",
        ["function log(): void {}"],
        "The void type is used for functions that do not return a value.",
    ),
    (
        "never", "never", 2,
        "Represents values that never occur",
        ["function throwError(): never { throw new Error(); }"],
        "The never type represents the type of values that never occur.",
    ),
    (
        "any", "any", 1,
        "Disables type checking (use with caution)",
        ["let value: any = 42;"],
        "The any type allows any value and disables type checking.",
    ),
    (
        "unknown", "unknown", 2,
        "Type-safe alternative to any",
        ["let value: unknown = getData();"],
        "The unknown type is the type-safe counterpart of any.",
    ),
]

# (id, name, kind, category, complexity, description, examples, documentation)
STRUCTURED = [
    (
        "object", "object", TypeKind.OBJECT, Category.BUILT_IN, 2,
        "General object type",
        ["{}", "{ key: value }", "new Object()"],
        "The object type represents non-primitive types.",
    ),
    (
        "array", "Array<T>", TypeKind.ARRAY, Category.BUILT_IN, 2,
        "Generic array type",
        ["number[]", "Array<string>", "readonly T[]"],
        "Arrays are list-like objects with numeric indices.",
    ),
    (
        "function", "Function", TypeKind.FUNCTION, Category.BUILT_IN, 2,
        "Function type",
        ["() => void", "(x: number) => string", "Function"],
        "Functions are first-class objects in TypeScript.",
    ),
    (
        "generic", "Generic<T>", TypeKind.GENERIC, Category.ADVANCED, 4,
        "Parameterized types for reusability",
        ["T", "K extends keyof T", "Generic<T, U>"],
        "Generics provide a way to make components work with any type.",
    ),
    (
        "union", "Union Types", TypeKind.UNION, Category.ADVANCED, 3,
        "Type that can be one of several types",
        ["string | number", "A | B | C", "T | U"],
        "Union types represent values that can be one of several types.",
    ),
    (
        "intersection", "Intersection Types", TypeKind.INTERSECTION, Category.ADVANCED, 4,
        "Type that combines multiple types",
        ["A & B", "User & Admin", "T & U"],
        "Intersection types combine multiple types into one.",
    ),
]

UTILITY_TYPES = [
    ("partial", "Partial<T>", "Makes all properties optional"),
    ("required", "Required<T>", "Makes all properties required"),
    ("readonly", "Readonly<T>", "Makes all properties readonly"),
    ("pick", "Pick<T, K>", "Picks specific properties"),
    ("omit", "Omit<T, K>", "Omits specific properties"),
    ("record", "Record<K, T>", "Creates object type with specific keys"),
    ("exclude", "Exclude<T, U>", "Excludes types from union"),
    ("extract", "Extract<T, U>", "Extracts types from union"),
    ("nonnullable", "NonNullable<T>", "Removes null and undefined"),
    ("returntype", "ReturnType<T>", "Gets function return type"),
    ("parameters", "Parameters<T>", "Gets function parameter types"),
    ("instancetype", "InstanceType<T>", "Gets constructor instance type"),
]

_E, _U, _C, _T = (
    Relationship.EXTENDS,
    Relationship.USES,
    Relationship.COMPOSES,
    Relationship.TRANSFORMS,
)

# (source, target, relationship, strength, description)
RELATIONSHIPS = [
    ("array", "object", _E, 7, "Arrays are objects"),
    ("function", "object", _E, 6, "Functions are objects"),
    ("array", "generic", _U, 9, "Arrays use generic parameters"),
    ("partial", "generic", _U, 9, "Utility types use generics"),
    ("required", "generic", _U, 9, "Utility types use generics"),
    ("readonly", "generic", _U, 9, "Utility types use generics"),
    ("pick", "generic", _U, 9, "Pick uses generics"),
    ("omit", "generic", _U, 9, "Omit uses generics"),
    ("record", "generic", _U, 9, "Record uses generics"),
    ("union", "string", _C, 5, "Unions can include primitives"),
    ("union", "number", _C, 5, "Unions can include primitives"),
    ("union", "object", _C, 6, "Unions can include objects"),
    ("intersection", "object", _C, 7, "Intersections combine objects"),
    ("never", "void", _E, 3, "Never is a subtype of every type"),
    ("never", "any", _E, 2, "Never is assignable to any"),
    ("any", "unknown", _E, 4, "Any is assignable to unknown"),
    ("string", "unknown", _E, 3, "All types extend unknown"),
    ("number", "unknown", _E, 3, "All types extend unknown"),
    ("object", "unknown", _E, 3, "All types extend unknown"),
    ("partial", "object", _T, 8, "Transforms object properties"),
    ("required", "object", _T, 8, "Transforms object properties"),
    ("readonly", "object", _T, 8, "Transforms object properties"),
    ("pick", "object", _T, 8, "Picks from objects"),
    ("omit", "object", _T, 8, "Omits from objects"),
    ("record", "object", _T, 8, "Creates object types"),
]


def seed_builtin_catalogue(store: GraphStore) -> GraphStore:
    """Add the built-in concept nodes and their relationships to a store."""
    for node_id, name, complexity, description, examples, documentation in PRIMITIVES:
        store.add_node(
            id=node_id,
            name=name,
            kind=TypeKind.PRIMITIVE,
            category=Category.BUILT_IN,
            description=description,
            complexity=complexity,
            examples=examples,
            documentation=documentation,
        )

    for node_id, name, kind, category, complexity, description, examples, documentation in (
        STRUCTURED
    ):
        store.add_node(
            id=node_id,
            name=name,
            kind=kind,
            category=category,
            description=description,
            complexity=complexity,
            examples=examples,
            documentation=documentation,
        )

    for node_id, name, description in UTILITY_TYPES:
        store.add_node(
            id=node_id,
            name=name,
            kind=TypeKind.UTILITY,
            category=Category.UTILITY,
            description=description,
            complexity=3,
            examples=[f"{name.split('<')[0]}<SomeType>"],
            documentation=f"{description} using mapped types.",
        )

    for source, target, relationship, strength, description in RELATIONSHIPS:
        store.add_edge(source, target, relationship, strength, description)

    return store
