# <b>fill_color</b> and <b>stroke_color</b> take hex strings.

pdf.stroke_axis()
pdf.fill_color = "ff8844"
pdf.stroke_color = "224488"
pdf.line_width = 4
pdf.fill_rectangle((0, 250), 150, 100)
pdf.stroke_rectangle((200, 250), 150, 100)
