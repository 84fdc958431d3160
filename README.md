# htmltoadf

Convert HTML into Atlassian Document Format (ADF), the JSON document
structure used by Jira and Confluence.

The converter parses the HTML with html5lib and walks the tree. It keeps
only the nesting that ADF allows. It carries inline styling down to the text
nodes as marks: bold, italics, underline, strike-through, links, code,
sub/superscript and text colour.

## Installation

```
pip install htmltoadf
```

## Command line

Read HTML from a file and print the ADF document to standard output:

```
html2adf page.html
```

Read HTML from standard input and write the result to a file:

```
cat page.html | html2adf --outpath page.json
```

- `inpath`: the HTML file to read. Standard input is used when it is left out.
- `-o`, `--outpath`: the file to write. Standard output is used when it is left out.
- `-V`, `--version`: print the program version and exit.

Input and output files are read and written as UTF-8. If a file cannot be
read or written, the command prints a message to standard error and exits
with status 1.

`python -m htmltoadf.cli` runs the same command.

## Library

```python
from htmltoadf.builder import convert_html_str_to_adf_str

adf = convert_html_str_to_adf_str("<h1>Hello World</h1>")
print(adf)
# {"version":1,"type":"doc","content":[{"type":"heading","attrs":{"level":1},
#  "content":[{"type":"text","text":"Hello World"}]}]}
```

The result is a compact JSON string. If you want the document as Python
dictionaries, build the node tree yourself and call `NodeList.to_dict()`:

```python
from htmltoadf.builder import build_adf_doc
from htmltoadf.extractor import escape_hr, extract_leaves, parse_fragment

root = parse_fragment(escape_hr("<p>Hello</p>"))
document = build_adf_doc(extract_leaves(root)).to_dict()
```

Modules:

- `htmltoadf.builder`: `convert_html_str_to_adf_str` and `build_adf_doc`.
- `htmltoadf.extractor`: HTML parsing (`parse_fragment`, `escape_hr`) and leaf extraction (`extract_leaves`).
- `htmltoadf.node_list`: `NodeList` and `AdfNode`, the handle-addressed tree that renders to JSON.
- `htmltoadf.placement`: mark building, inline style and colour handling, and placement of leaves in the tree.
- `htmltoadf.structure`: the element-to-ADF mapping (`NODE_MAP`) and the permitted nesting (`LEGAL_CHILD_TYPES`).

## Supported HTML

| HTML                          | ADF                                |
|-------------------------------|------------------------------------|
| `p`                           | `paragraph`                        |
| `h1` – `h6`                   | `heading` with `level`             |
| `ul`, `ol`, `li`              | `bulletList`, `orderedList`, `listItem` |
| `blockquote`                  | `blockquote`                       |
| `table`, `tr`, `th`, `td`     | `table`, `tableRow`, `tableHeader`, `tableCell` |
| `hr`                          | `rule`                             |
| `br`                          | `hardBreak`                        |
| `img`                         | `mediaSingle` holding a `media` node |
| `iframe`                      | a paragraph with the text "External Content" and a link mark |
| `b`, `strong`, `i`, `em`, `u` | `strong`, `em`, `underline` marks  |
| `a`, `code`, `sub`, `sup`     | `link`, `code`, `subsup` marks     |

Any other element is treated as plain text.

Inline `style` attributes are honoured for `color` and `text-decoration`.
A `color` may be written as hex, short hex, `rgb()` or `rgba()`. A
`text-decoration` of `underline` or `line-through` adds a mark. When a
`code` mark applies, every mark other than `code` and `link` is dropped.

Images with a `src` become external media. Without `src`, a
`data-media-id` produces file media. File media also takes the optional
`data-collection`, `alt`, `data-width`, `data-height` and `data-width-type`
attributes. `data-width-type` must be `pixel` or `percentage`. `data-layout`
sets the layout, which is `center` by default.

Text outside `pre` that is only whitespace is dropped. Inside `pre`, all
whitespace is kept.

## Limitations

- The conversion goes one way only. ADF cannot be turned back into HTML.
- The output is not checked against the ADF JSON schema. Structures that
  are not in the nesting table are skipped or flattened, not reported.
- The link made for an `iframe` holds its `src` as a JSON-quoted string,
  with the quotation marks included.

## Running the tests

```
pip install -e ".[test]"
pytest
```