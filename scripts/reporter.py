###########################################################################
# MIT License
#
# Copyright (c) 2020 Matthew Sottile
#
# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
###########################################################################
import argparse
import epigrid.stats as S

## command line
parser = argparse.ArgumentParser(description="epigrid Reporter")
parser.add_argument('-i', '--input', help='Input HDF5 file.', required=True)
parser.add_argument('-c', '--header', help='Print row of column headers.', action='store_true', required=False, default=False)

def main(argv=None):
    args = parser.parse_args(argv)

    (param_string, runs) = S.read_archive(args.input)

    summaries = [S.summarize(runs[seed]) for seed in sorted(runs)]
    output = S.aggregate(summaries)

    columns = ['n_seeds'] + S.SUMMARY_COLUMNS
    if args.header:
        print(','.join(columns))
    print(','.join([str(output[c]) for c in columns]))

if __name__ == '__main__':
    main()
