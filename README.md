# arclint

`arclint` is a library of lints for ARC proposal documents: Markdown files
that begin with a `---` delimited preamble of `name: value` headers,
followed by a body split into level-two sections.

Every problem a lint finds is reported as a `Snippet` (in
`arclint.snippet`): a titled diagnostic pointing at the offending lines, with
optional source annotations and footer notes. `format_snippet` renders a
snippet in a compiler-style text form.

## What is checked

`arclint.registry.default_lints()` yields `(slug, lint)` pairs for the
default set:

- **Preamble structure** – headers may not be duplicated (`NoDuplicates`),
  values must start with a single space and carry no extra whitespace
  (`Trim`), only known headers may appear and in the expected order
  (`Order`).
- **Required headers** – `arc`, `title`, `description`, `author`, `status`,
  `type` and `created` must be present (`Required`); `last-call-deadline`,
  `category` and `withdrawal-reason` are required exactly when `status` or
  `type` calls for them (`RequiredIfEq`).
- **Header values** – unsigned integers (`Uint` for `arc`; `List` and
  `UintList` for `requires`, `extends`, `extended-by`, `replaces`,
  `superseded-by`, which must also be sorted), dates in `YYYY-MM-DD` form
  (`Date`), URLs (`Url`), lengths of `title`, `description` and
  `withdrawal-reason` (`Length`), allowed values of `status`, `type`,
  `category` and `sub-category` (`OneOf`), and the format of `author`
  entries, at least one of which must carry a GitHub username (`Author`).
- **Wording** – titles and descriptions may not mention "standard", and
  other proposals must be referenced as `ARC-N` (`Regex`,
  `RequireReferenced`).
- **File name** – a document must be named after its `arc` header, e.g.
  `arc-0042.md` (`FileName`).
- **Dependencies** – proposals listed in `requires` (`RequiresStatus`) or
  linked from the body (`LinkStatus`) must be at least as advanced in their
  status as the proposal itself.
- **Body** – `Abstract`, `Specification`, `Rationale`,
  `Security Considerations` and `Copyright` are required
  (`SectionRequired`), known sections must appear in order
  (`SectionOrder`), `arc-N`/`ARC N` spellings are rejected
  (`MarkdownRegex`), the first mention of another proposal must be a link
  (`LinkFirst`), and links and images must be relative (`RelativeLinks`).

## Usage

A lint runs against a `Context` (in `arclint.context`) holding the parsed
preamble, the Markdown tree of the body and a reporter. Lints that need
other proposals name them through `find_resources` on a `FetchContext`, and
read them back with `Context.arc`, which looks them up in `Context.arcs`
by path, relative to the directory of the context's `origin`.

```python
import asyncio
from pathlib import Path

from arclint.context import Context, FetchContext, parse_preamble, split_preamble
from arclint.fetch import FileFetch
from arclint.mdtree import parse_markdown
from arclint.registry import default_lints
from arclint.snippet import JsonReporter, NullReporter


def load(source, origin, reporter):
    preamble_text, body_text = split_preamble(source)
    return Context(
        preamble=parse_preamble(origin, preamble_text),
        source=source,
        body_source=body_text,
        # Body lines are shifted so they count from the top of the document.
        body=parse_markdown(body_text, preamble_text.count("\n") + 3),
        reporter=reporter,
        origin=origin,
    )


async def check(path):
    fetch = FileFetch()
    lints = sorted(default_lints(), key=lambda pair: pair[0])
    reporter = JsonReporter()
    ctx = load(await fetch.fetch(path), path, reporter)

    wanted = FetchContext(ctx.preamble, ctx.body)
    for _, lint in lints:
        lint.find_resources(wanted)

    root = Path(path).parent
    for name in wanted.arcs:
        key = root / name
        try:
            ctx.arcs[key] = load(await fetch.fetch(key), None, NullReporter())
        except OSError as error:
            ctx.arcs[key] = error

    for slug, lint in lints:
        lint.lint(slug, ctx)
    return reporter.into_reports()


for report in asyncio.run(check("ARCs/arc-0042.md")):
    print(report["formatted"])
```

`split_preamble` raises `SplitError` (with `kind` set to `missing_start`,
`leading_garbage` or `missing_end`) when the document is not framed by
`---` lines, and `parse_preamble` raises `ParseError`, whose `snippets`
describe each malformed line. An error stored in `Context.arcs` in place of
a context is reported by the lints that need that proposal, as
"unable to read file".

`JsonReporter` collects each snippet as a dictionary holding `title`,
`slices`, `footer` and `opt`, plus `formatted` with the rendered text;
`NullReporter` discards everything. `FileFetch` reads UTF-8 files from disk;
`NullFetch` refuses every read with `io.UnsupportedOperation`.

Custom lints subclass `arclint.context.Lint` and implement
`lint(slug, ctx)`, reporting through `ctx.report(snippet)`.

## What the package does not do

There is no command-line tool and no ready-made driver that reads a list of
files, loads the proposals they depend on and runs every lint over them:
the steps in the example above are left to the caller.