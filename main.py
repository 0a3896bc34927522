from rich.pretty import pprint

from haggis import *

template = {
    "count": 10,
    "exclude": False,
    "source": [],
    "destination": "",
}

options = {
    "strict": True,  # field names must be present in the template
    "initial": "source",  # values before the first flag go to 'source', so '-s' is optional
    "silent": False,
    "shell": True,
}


if __name__ == '__main__':
    print("USAGE: python main.py * -d /tmp -e")
    pprint(haggis(template, options))
