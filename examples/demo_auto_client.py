#!/usr/bin/env python3
"""Demonstration of the dynamic GraphQL client.

This script shows how to:
1. Connect a client (here against an in-process schema)
2. Inspect the operations synthesized from the schema
3. Call them with and without a projection

Point ``http_options.url`` at a real endpoint and drop the SchemaLink to
talk to a remote API instead.
"""

import asyncio

from graphql import build_schema

from gql_autoclient import new_graphql_client
from gql_autoclient.core import SchemaLink

SDL = """
type Query {
  "Find a book by its ISBN"
  book(isbn: ID!): Book
  books(author: String): [Book!]!
}

type Mutation {
  addBook(isbn: ID!, title: String!, author: String!): Book
}

type Book {
  title: String
  isbn: ID!
  author: Author
}

type Author {
  name: String!
}
"""

BOOKS = {
    "978-0262033848": {"isbn": "978-0262033848", "title": "Introduction to Algorithms",
                       "author": {"name": "Cormen"}},
}


def add_book(info, isbn, title, author):
    BOOKS[isbn] = {"isbn": isbn, "title": title, "author": {"name": author}}
    return BOOKS[isbn]


ROOT = {
    "book": lambda info, isbn: BOOKS.get(isbn),
    "books": lambda info, author=None: [
        b for b in BOOKS.values() if author is None or b["author"]["name"] == author
    ],
    "addBook": add_book,
}


async def main():
    print("=== Dynamic GraphQL Client Demo ===\n")

    print("1. Connecting...")
    client = await new_graphql_client({"links": [SchemaLink(build_schema(SDL), ROOT)]})

    print("\n2. Synthesized operations:")
    for name, op in client.operations.items():
        print(f"   {name} ({op.kind}): {op.build()}")

    print("\n3. Default projection:")
    print(f"   {await client.book({'isbn': '978-0262033848'})}")

    print("\n4. Custom projection:")
    book = await client.book(
        {"isbn": "978-0262033848"},
        {"title": True, "author": {"name": True}},
    )
    print(f"   {book}")

    print("\n5. Mutation:")
    added = await client.addBook(
        {"isbn": "978-0131103627", "title": "The C Programming Language", "author": "Kernighan"},
        {"isbn": True, "title": True},
    )
    print(f"   {added}")

    await client.close()


if __name__ == "__main__":
    asyncio.run(main())
