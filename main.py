from rich.pretty import pprint

from hashparse import *


parser = Parser("main", description="hashparse example program", shell=True)
parser.add("--say", 1, "Repeat something", callback=lambda values: print(*values))
compute = parser.add("-c", 0, "Compute something")
parser.add_subcommand(compute, "--add", 2, "Add two numbers", callback=lambda values: print(sum(map(float, values))))


if __name__ == '__main__':
    pprint(parser.parse())
