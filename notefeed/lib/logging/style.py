from pygments.style import Style
from pygments.token import Keyword, Name, Number, String, Token


class LogStyle(Style):
    styles = {
        Token: "#a8a8a8",
        Name.Tag: "#5f87d7",
        String: "#87af5f",
        Number: "#d7875f",
        Keyword.Constant: "#af87d7",
    }
