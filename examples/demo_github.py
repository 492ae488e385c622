#!/usr/bin/env python3
"""Demonstration of encoding GitHub-style queries.

This script shows how to:
1. Describe a query with plain lists, dicts and tags
2. Encode it as a named query with variables
3. Collapse the edges/node wrappers of a paginated response

Note: This demo doesn't make real API calls - the response below is canned.
"""

import json

from gql_encode import ARGUMENTS, Token, Variable, mutation, query, simplify_response_edges


def main():
    print("=== gql-encode Demo ===\n")

    # 1. A graph description
    graph = [
        ARGUMENTS, {"owner": Variable("owner"), "name": Variable("name")},
        "repository",
        "description",
        [
            ARGUMENTS, {"first": 2, "orderBy": {"field": Token("CREATED_AT"), "direction": Token("DESC")}},
            "issues",
            ["edges", ["node", "title", "number"]],
        ],
    ]

    print("1. Named query with variables:")
    text = query(("RecentIssues", [("owner", "String", True), ("name", "String", True)]), graph)
    print(f"   {text}")

    print("\n2. Mutation with an inline input object:")
    text = mutation([ARGUMENTS, {"input": {"starrableId": "MDEwOlJlcG9zaXRvcnkx"}}, "addStar", ["starrable", "id"]])
    print(f"   {text}")

    print("\n3. Simplifying a paginated response:")
    response = {
        "repository": {
            "description": "My first repository",
            "issues": {
                "edges": [
                    {"node": {"title": "Found a bug", "number": 2}},
                    {"node": {"title": "Add docs", "number": 1}},
                ]
            },
        }
    }
    print(json.dumps(simplify_response_edges(response), indent=2))

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
