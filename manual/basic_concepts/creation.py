# Examples receive the document as <b>pdf</b>. A standalone document is created
# with <b>Manual.generate</b>, which opens the first page, runs a function
# against the document and saves it.
#
# manual: no-eval

from example_manual import Manual


def hello(pdf):
    pdf.text("Hello World!")


Manual.generate("hello.pdf", hello)
