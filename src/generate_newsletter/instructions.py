NEWSLETTER_INSTRUCTIONS = """You are an expert newsletter writer. Create an engaging HTML newsletter about "{topic}".

Here are {count} relevant articles I found:

{articles}

Instructions:
1. Create a professional HTML newsletter with a compelling subject line
2. Write an engaging introduction about why this topic matters
3. Summarize the key insights from the articles above
4. Include article titles as clickable links (use the URLs provided)
5. Add a brief conclusion
6. Use clean HTML formatting with proper headings, paragraphs, and styling
7. Make it readable and visually appealing
8. Use only the information in the articles above

Format your response EXACTLY as:
SUBJECT: [your subject line here]
BODY:
[your HTML content here]

Start your response now:"""

FORMAT_CORRECTION = """

Your previous answer could not be used because it did not follow the required format.
Reply again starting with a line "SUBJECT: ..." followed by a line "BODY:" and the HTML content."""
