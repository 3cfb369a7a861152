from rich.pretty import pprint

from argmap import *

parser = ArgsParser("calc", "solves all your problems", shell=True)
parser.add_positional(Positional("action", required=True, help="add, sub, prod or div"))
parser.add_string_flag(StringFlag(short="o", nargs=2, metavars=("a", "b"), help="operands"))
parser.add_bool_flag(BoolFlag("verbose", "v", help="prints the parsed arguments"))

greet = parser.add_command("greet", "says hello")
greet.add_string_flag(StringFlag("hello", "hi", metavars=("name",), help="who to greet"))
greet.add_list_flag(ListFlag("others", "o", metavar="name", help="who else to greet"))

OPERATIONS = {
    "add": lambda a, b: a + b,
    "sub": lambda a, b: a - b,
    "prod": lambda a, b: a * b,
    "div": lambda a, b: a / b,
}


if __name__ == '__main__':
    namespace = parser.parse()
    if get_bool(namespace, "verbose"):
        pprint(namespace)

    try:
        name, options = get_command(namespace)
    except LookupError:
        pass
    else:
        names = [get_value(options, "hello", 0)] if is_present(options, "hello") else []
        if is_present(options, "others"):
            names += get_list(options, "others")
        print("hello, %s!" % (", ".join(names) or "world"))

    action = get_positional(namespace, "action")
    if action not in OPERATIONS:
        parser.report_error(ValueError("unknown operation %r" % action))
    try:
        a, b = map(float, get_values(namespace, "o"))
    except KeyError:
        parser.report_error(ValueError("operands are missing, pass them with -o a b"))
    except ValueError:
        parser.report_error(ValueError("operands are not numbers"))
    print(OPERATIONS[action](a, b))
