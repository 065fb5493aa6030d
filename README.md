# petweb

This package provides minimal HTTP/1.0 tools for serving and fetching files.
It also contains the small data structures they are built on.

## Install

    pip install .
    pip install ".[test]"   # with pytest

## Commands

### Client

Fetch a path from a server:

    petweb-client <hostname> <port> <path>

If the server answers 200, the body goes to standard output. For any other
status, the headers and body go to standard error and the command exits with
status 1.

### Servers

Each server serves files relative to the current directory. A request has the
form `GET /<file> HTTP/1.0`. The port must be 1500 or higher.

    petweb-server1 <port>   # one connection at a time, blocking
    petweb-server2 <port>   # select() over up to 64 connections
    petweb-server3 <port>   # event-driven, non-blocking socket and file I/O

- A file that is found is answered with `200 OK`, `Content-type: text/plain` and its length.
- A file that is missing is answered with a small `404 FILE NOT FOUND` HTML page.
- `petweb-server2` and `petweb-server3` close a connection that does not send a `GET` request line, and give it no reply.

### Demos

There are two small interactive demos. Each one:

1. takes words as arguments,
2. asks for an index (starting at 1),
3. prints the word at that index and removes it.

The demos:

    petweb-hashtable-demo alpha beta gamma
    petweb-list-demo alpha beta gamma

## Library use

### Hash table

`petweb.hashtable.HashTable` is a chained hash table:

- Its buckets are prime-sized.
- It grows when it passes a load factor of 0.65.
- You supply the hash and equality functions.
- You may supply callbacks that run when a value or a key is released.

Example:

    from petweb.hashtable import HashTable, hash_u32, cmp_ptr

    table = HashTable(0, hash_u32, cmp_ptr, None, None)
    table.insert(1, "one")
    table.search(1)        # "one"
    table.remove(1)        # "one"
    len(table)             # 0

Other operations:

- `change`, `inc` and `dec` update an existing key. They raise `KeyError` if the key is absent.
- `cond_remove` removes a key only when a predicate accepts its value.
- `clear` empties the table.
- Iterating the table yields `(key, value)` pairs.

`HashTable.iterator()` returns a `HashTableIterator` cursor. It supports `advance()`, `key()`, `value()`, `remove()` and `search(table, key)`.

The module also provides these hash helpers:

- `hash_u32`
- `hash_ptr`
- `hash_buffer`
- `cmp_ptr`

### Linked lists

`petweb.linkedlist` provides two list types:

- `LinkedList` is a circular doubly linked list. It supports:
  - `add` and `add_tail`, which return the new `ListNode`
  - `remove`, `move`, `move_tail` and `splice`
  - `first` and `nodes`
  - forward and reverse iteration
- `HList` is a list with a single head pointer. It supports `add_head`, `add_before`, `add_after` and `remove`.

### Servers and client in code

`BlockingServer`, `SelectServer` and `EventServer` are context managers. Each has a `port` attribute and `serve_forever()`. They also have these methods for driving one step at a time:

- `BlockingServer.handle_one()`
- `poll(timeout)` on the other two

`petweb.client.fetch(host, port, path, out, err)` performs one request and returns the status code.

## Limitations

- Only `GET` is understood. There is no HEAD, POST, keep-alive or chunked transfer.
- Every served file is labelled `text/plain`.
- There are no directory listings and no path sanitising. The requested name is opened as given, relative to the current directory.
- Requests larger than about 1 KiB are not supported.