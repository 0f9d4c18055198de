# booklog

A small book-lookup HTTP service built as a WSGI application. Every log line is
written as one JSON object per line, both to standard output and to an
Elasticsearch index. The package also includes a seeder that sends requests to
the service in a loop, which keeps log traffic flowing.

## Installation

```
pip install .
```

Add the `test` extra to get pytest:

```
pip install ".[test]"
```

## Running the server

```
booklog-server
```

The server listens on port 8081 on all interfaces, using the standard
library's `wsgiref` server. It reads its settings from the environment, and
also from a `.env` file if one is present:

| Variable        | Meaning                                                     | Default                 |
|-----------------|-------------------------------------------------------------|-------------------------|
| `ENV_ES_URL`    | Elasticsearch base URL; documents go to `<url>/logs/_doc`   | `http://localhost:9200` |
| `ENV_LOG_LEVEL` | Set to `debug` to log info messages as well as errors       | errors only             |

If Elasticsearch cannot be reached or answers with a status other than 200 or
201, the log line is dropped for that sink. Standard output still gets it.

Ctrl-C stops the server with exit status 130. If the port cannot be opened,
the server logs `server stopped` and exits with status 1.

### Endpoints

- `GET /books` returns all books as a JSON array. Each book has `id`, `title`,
  `author` and `published_on` (formatted as `YYYY-MM-DD`).
- `GET /book?author=<name>` returns the first book whose author matches
  `<name>` exactly.

Before the lookup, the author is lower-cased and checked against the supported
authors: "james smith", "jack jones" and "rachel barnes". A missing author or
an unsupported one gets a 400 answer.

Other errors map to status codes like this:

- no rows found: 404
- any other store failure: 500
- unknown path: 404
- a method other than GET on a known path: 405

Error bodies are plain text. Every answer from a known path carries an
`X-Request-ID` header. The handler's log lines record the same ID under
`request_id`.

### The book store

The store behind the service is `booklog.db.MockDb`. It keeps no data of its
own. Each call picks one of three outcomes at random:

- it returns three fixed books,
- it raises `NoRowsError`, which becomes a 404,
- it fails with an unknown error, which becomes a 500.

None of the three fixed books is by a supported author. So `GET /book` never
finds a book; it answers 404 or 500.

## Generating traffic

```
booklog-seeder
```

The seeder sends `GET http://localhost:8081/books` requests one after another
until you interrupt it with Ctrl-C or it receives SIGTERM. Use `--url` to
request another address. Connection errors are printed and the loop goes on.

## Using the pieces from Python

```python
from booklog.db import MockDb
from booklog.library import MockAdaptor, Service
from booklog.multilog import Level, MultiSourceLogger
from booklog.transport import Handler, make_app

logger = MultiSourceLogger(level=Level.INFO)
service = Service(MockAdaptor(MockDb()), {"jack jones"}, logger)
app = make_app(Handler(service, logger))
```

Any WSGI server can then serve `app`. To get the same application the
`booklog-server` command runs, call `booklog.server.build_app(environ)` with a
mapping of the variables in the table above.

The modules are:

- `booklog.db`: `MockDb`, its `Book` rows and `NoRowsError`.
- `booklog.library`: `Service`, `MockAdaptor`, the `BookGetter` protocol and
  the `LibraryError` family (`EmptyBookNameError`, `EmptyAuthorError`,
  `UnsupportedAuthorError`, `NoBooksError`, `DatabaseError`).
- `booklog.multilog`: `JsonLogger`, `MultiSourceLogger` and `Level`.
- `booklog.eswriter`: `ESWriter`, a writer that posts each chunk to
  Elasticsearch.
- `booklog.transport`: `Handler`, `App`, `make_app`, `Response`,
  `BookResponse` and `new_book_response`.
- `booklog.seeder`: `fetch_once` and `run`, the seeder's loop.
- `booklog.fib`: `fib(n)`, a naive recursive Fibonacci function.

## Limitations

- There is no real database. All data comes from `MockDb`, which answers at
  random and cannot be written to.
- `Service.get_book_by_name` exists in Python but has no HTTP endpoint.