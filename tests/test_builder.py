import json

import pytest

from htmltoadf.builder import build_adf_doc, convert_html_str_to_adf_str
from htmltoadf.extractor import DocNode, HtmlNode, NodeKind, extract_leaves, parse_fragment


def assert_output_json_eq(html, expected):
    converted = convert_html_str_to_adf_str(html)
    assert converted == json.dumps(expected, separators=(",", ":"), ensure_ascii=False)


def doc(*content):
    return {"version": 1, "type": "doc", "content": list(content)}


def text(value, marks=None):
    node = {"type": "text", "text": value}
    if marks is not None:
        node["marks"] = marks
    return node


def paragraph(*content):
    return {"type": "paragraph", "content": list(content)}


def list_item(*content):
    return {"type": "listItem", "content": list(content)}


def cell(*content):
    return {"type": "tableCell", "content": list(content)}


def color_mark(color):
    return {"type": "textColor", "attrs": {"color": color}}


HARD_BREAK = {"type": "hardBreak"}


# Colours

@pytest.mark.parametrize(
    "html, color",
    [
        ("<p style='color: #332255'>Paragraph</p>", "#332255"),
        ("<p style='color: #389'>Paragraph</p>", "#338899"),
        ("<p style='color: rgb(100, 200, 214);'>Paragraph</p>", "#64c8d6"),
    ],
)
def test_colors(html, color):
    assert_output_json_eq(html, doc(paragraph(text("Paragraph", [color_mark(color)]))))


# Marks

def test_style_marks_color_then_underline():
    assert_output_json_eq(
        "<p style='text-decoration: underline; color: #333;'>Paragraph</p>",
        doc(paragraph(text("Paragraph", [color_mark("#333333"), {"type": "underline"}]))),
    )


def test_line_through_gives_strike():
    assert_output_json_eq(
        '<p><span style="text-decoration: line-through">gone</span></p>',
        doc(paragraph(text("gone", [{"type": "strike"}]))),
    )


def test_nested_inline_marks_accumulate():
    assert_output_json_eq(
        "<b><i>x</i></b>",
        doc(paragraph(text("x", [{"type": "strong"}, {"type": "em"}]))),
    )


def test_code_mark_drops_other_marks():
    assert_output_json_eq(
        "<p>a<b><code>x</code></b></p>",
        doc(paragraph(text("a"), text("x", [{"type": "code"}]))),
    )


# Empty documents

@pytest.mark.parametrize("html", ["", "<html></html>"])
def test_empty(html):
    assert_output_json_eq(html, doc())


# Headings

@pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
def test_headings(level):
    assert_output_json_eq(
        f"<h{level}>H{level}</h{level}>",
        doc({"type": "heading", "attrs": {"level": level}, "content": [text(f"H{level}")]}),
    )


def test_h7_is_plain_text():
    assert_output_json_eq("<h7>H7</h7>", doc(paragraph(text("H7"))))


def test_hello_world():
    assert_output_json_eq(
        "<h1>Hello World</h1>",
        doc({"type": "heading", "attrs": {"level": 1}, "content": [text("Hello World")]}),
    )


# Images

@pytest.mark.parametrize(
    "html, url",
    [
        ("<img src='http://www.google.com/test.jpg'/>", "http://www.google.com/test.jpg"),
        ("<img src='relative/abc.jpg'>", "relative/abc.jpg"),
    ],
)
def test_external_images(html, url):
    assert_output_json_eq(
        html,
        doc({
            "type": "mediaSingle",
            "attrs": {"layout": "center"},
            "content": [{"type": "media", "attrs": {"url": url, "type": "external"}}],
        }),
    )


def test_file_image():
    converted = json.loads(convert_html_str_to_adf_str(
        '<img data-media-id="abc" data-collection="col" data-width="100" '
        'data-width-type="pixel" data-layout="wide">'
    ))
    assert converted == doc({
        "type": "mediaSingle",
        "attrs": {"layout": "wide"},
        "content": [{
            "type": "media",
            "attrs": {
                "id": "abc",
                "type": "file",
                "collection": "col",
                "width": 100,
                "widthType": "pixel",
            },
        }],
    })


def test_horizontal_rule():
    assert_output_json_eq("<hr>", doc({"type": "rule"}))


# Lists

@pytest.mark.parametrize("tag, list_type", [("ul", "bulletList"), ("ol", "orderedList")])
def test_single_level_lists(tag, list_type):
    html = f"""
      <{tag}>
        <li>Item One</li>
        <li>Item Two</li>
        <li>Item Three</li>
      </{tag}>
    """
    assert_output_json_eq(
        html,
        doc({
            "type": list_type,
            "content": [
                list_item(paragraph(text("Item One"))),
                list_item(paragraph(text("Item Two"))),
                list_item(paragraph(text("Item Three"))),
            ],
        }),
    )


def test_nested_list():
    html = (
        "\n<ul>\n<li>\n  Nested List\n  <ol>\n"
        "<li>Item One</li>\n<li>Item Two</li>\n<li>Item Three</li>\n"
        "</ol>\n</li>\n</ul>\n"
    )
    assert_output_json_eq(
        html,
        doc({
            "type": "bulletList",
            "content": [
                list_item(
                    paragraph(text("\n  Nested List\n  ")),
                    {
                        "type": "orderedList",
                        "content": [
                            list_item(paragraph(text("Item One"))),
                            list_item(paragraph(text("Item Two"))),
                            list_item(paragraph(text("Item Three"))),
                        ],
                    },
                ),
            ],
        }),
    )


# Combination

def test_combination():
    html = """
        <html>
            <body>
                <p>A Paragraph</p>
                <ul>
                    <li>An unordered list</li>
                    <li>
                        <p>Some Content</p>
                        <ol>
                            <li>With an ordered list inside it</li>
                        </ol>
                    </li>
                    <li>
                        <div style='color: #0F0'>
                            <span>With some blue text inside</span>
                        </div>
                    </li>
                    <li>
                        <p>And an image!</p>
                        <img src='http://example.com/example.jpg/>
                    </li>
                </ul>
            </body>
        </html>
    """
    assert_output_json_eq(
        html,
        doc(
            paragraph(text("A Paragraph")),
            {
                "type": "bulletList",
                "content": [
                    list_item(paragraph(text("An unordered list"))),
                    list_item(
                        paragraph(text("Some Content")),
                        {
                            "type": "orderedList",
                            "content": [
                                list_item(paragraph(text("With an ordered list inside it"))),
                            ],
                        },
                    ),
                    list_item(paragraph(
                        text("With some blue text inside", [color_mark("#00FF00")])
                    )),
                    list_item(paragraph(text("And an image!"))),
                ],
            },
        ),
    )


# Paragraphs

def test_paragraph_top_level():
    assert_output_json_eq("<p>Paragraph</p>", doc(paragraph(text("Paragraph"))))


def test_nested_paragraphs_are_flattened():
    assert_output_json_eq(
        "<p>Paragraph<p>Nested</p></p>",
        doc(paragraph(text("Paragraph")), paragraph(text("Nested"))),
    )


def test_empty_paragraphs():
    html = (
        '\n<h1>\n<span style="color: #f1c40f;">qweq</span>wewq\n</h1>\n'
        "<p>&nbsp;</p>\n<p>&nbsp;</p>\n<p>&nbsp;</p>\n<p>qweqwe</p>\n"
    )
    assert_output_json_eq(
        html,
        doc(
            {
                "type": "heading",
                "attrs": {"level": 1},
                "content": [text("qweq", [color_mark("#f1c40f")]), text("wewq\n")],
            },
            paragraph(text("qweqwe")),
        ),
    )


def test_hard_breaks():
    html = (
        "\nNaked <br/> break\n"
        "<p>Paragraph <br/> break</p>\n"
        "<p>Double</br> Paragraph <br/> breaks</p>\n"
        "<p>Sibling <br/><br/> breaks</p>\n"
    )
    assert_output_json_eq(
        html,
        doc(
            paragraph(text("\nNaked "), HARD_BREAK, text(" break\n")),
            paragraph(text("Paragraph "), HARD_BREAK, text(" break")),
            paragraph(
                text("Double"), HARD_BREAK, text(" Paragraph "), HARD_BREAK, text(" breaks")
            ),
            paragraph(text("Sibling "), HARD_BREAK, HARD_BREAK, text(" breaks")),
        ),
    )


# Tables

TABLE_TEMPLATE = """<div><table ><tbody>
            <tr><td >A</td><td >B</td><td >C</td></tr>
            <tr><td >value 1</td><td >{middle}</td><td >value 2</td></tr>
            </tbody></table>
        </div>"""


def _table(middle_cell):
    return doc({
        "type": "table",
        "content": [
            {
                "type": "tableRow",
                "content": [
                    cell(paragraph(text("A"))),
                    cell(paragraph(text("B"))),
                    cell(paragraph(text("C"))),
                ],
            },
            {
                "type": "tableRow",
                "content": [
                    cell(paragraph(text("value 1"))),
                    middle_cell,
                    cell(paragraph(text("value 2"))),
                ],
            },
        ],
    })


def test_empty_cell():
    assert_output_json_eq(TABLE_TEMPLATE.format(middle=""), _table({"type": "tableCell"}))


def test_hard_break_in_cell():
    assert_output_json_eq(
        TABLE_TEMPLATE.format(middle="<br/>"),
        _table({"type": "tableCell", "content": []}),
    )


# build_adf_doc

def test_build_without_leaves_is_empty_doc():
    assert build_adf_doc([]).to_dict() == doc()


def test_build_skips_empty_text_leaf():
    root = HtmlNode(NodeKind.ELEMENT, name="html")
    blank = HtmlNode(NodeKind.TEXT, text="")
    root.append(blank)
    node_list = build_adf_doc([DocNode("text", "", blank)])
    assert node_list.count == 0


def test_build_paragraph_leaf_in_cell():
    root = HtmlNode(NodeKind.ELEMENT, name="html")
    td = HtmlNode(NodeKind.ELEMENT, name="td")
    root.append(td)
    para = HtmlNode(NodeKind.ELEMENT, name="p")
    td.append(para)
    node_list = build_adf_doc([DocNode("p", "", para)])
    assert [n.node_type for n in node_list.nodes] == ["doc", "tableCell", "paragraph", "text"]


def test_iframe_becomes_linked_paragraph():
    leaves = extract_leaves(parse_fragment('<iframe src="https://example.com/embed"></iframe>'))
    node_list = build_adf_doc(leaves)
    assert [n.node_type for n in node_list.nodes] == ["doc", "paragraph", "text"]
    link = node_list.node(3)
    assert link.attributes == [("text", "External Content")]
    assert link.marks == [
        {"type": "link", "attrs": {"href": '"https://example.com/embed"'}}
    ]
    assert node_list.to_dict() == doc({"type": "paragraph", "content": []})


def test_sibling_text_shares_paragraph():
    leaves = extract_leaves(parse_fragment("one<br>two"))
    node_list = build_adf_doc(leaves)
    paragraphs = [n for n in node_list.nodes if n.node_type == "paragraph"]
    assert len(paragraphs) == 1
    assert [node_list.node(h).node_type for h in paragraphs[0].children] == [
        "text", "hardBreak", "text",
    ]