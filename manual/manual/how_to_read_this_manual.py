# How to read this manual.

pdf.header("How to read this manual")
pdf.text(
    "The manual is split into packages. Each package opens with a cover page"
    " describing what it covers, followed by one page per example.",
    inline_format=True,
)
pdf.list(
    "The first line of an example page names the <b>folder</b> and the file.",
    "The paragraph below it introduces the example.",
    "The code is printed in a fixed-width font.",
    "Below the dashed line you see what the code draws when it runs.",
)
