# swiftemplate/core/runtime.py
"""
Swift runtime support for generated templates.

Functions generated with HTML quoting enabled call ``.HTMLQuote`` on the
string form of each filtered expression; that property is defined by the
extension below, which must be compiled into the same Swift module.
"""

HTML_QUOTE_RUNTIME_SOURCE = """\
/* HTML quoting support for swiftemplate-generated code */

extension String {
    /** Escape all the HTML special characters (i.e., </>) in the string. */
    var HTMLQuote: String {
        var result: String = ""

        for ch in self.characters {
            switch(ch) {
                case "<": result.appendContentsOf("&lt;")
                case ">": result.appendContentsOf("&gt;")
                default: result.append(ch)
            }
        }
        return result
    }
}
"""
