# License: BSD3

"""
Miscellaneous utility functions
"""


def add_subcommand(subparsers, module):
    '''
    Add a subcommand to an argparser following some conventions:

        - the module can have an optional NAME constant
          (giving the name of the command); otherwise we
          assume it's the unqualified module name
        - the first line of its docstring is its help text
        - subsequent lines (if any) form its epilog

    Returns the resulting subparser for the module
    '''
    module_name = getattr(module, 'NAME', module.__name__.split('.')[-1])
    doc_parts = [x for x in module.__doc__.strip().split('\n', 1) if x]
    module_help = doc_parts[0].strip()
    module_epilog = doc_parts[1].strip() if len(doc_parts) > 1 else None
    return subparsers.add_parser(module_name,
                                 help=module_help,
                                 epilog=module_epilog)
