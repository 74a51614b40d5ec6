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
import epigrid.initialize as I
import epigrid.stats as S

## command line
parser = argparse.ArgumentParser(description="epigrid contagion model")
parser.add_argument('-p', '--params', help='Params file.', required=True)
parser.add_argument('-o', '--output', help='Output HDF5 file.', required=True)
parser.add_argument('-c', '--csv', help='Prefix for per-seed CSV count files.', required=False, default=None)
parser.add_argument('-v', '--verbose', help='Print setup details.', action='store_true', required=False, default=False)

def main(argv=None):
  args = parser.parse_args(argv)
  I.verbose = args.verbose

  # load parameter file from disk as YAML, merged over the defaults
  (paramfile_string, model_params) = I.load_params(args.params)
  max_days = model_params['model']['max_days']

  for seed in range(model_params['model']['seed_min'], model_params['model']['seed_max']):
    print(f'running seed={seed}')

    # create the population and seed the initial outbreak
    pop = I.initialize_population(model_params, seed)

    # create a tracker to record the state counts over the run
    tracker = S.Tracker(pop)
    if tracker.check_redundant_run(paramfile_string, seed, args.output):
      print(f"redundant seed: skipping")
      continue

    # day 0 is recorded before anything moves
    tracker.record()

    ###### Main loop
    for day in range(max_days):
      pop.advance()
      tracker.record()

    summary = tracker.summary()
    print(f"peak infected={summary['peak_infected']} on day {summary['peak_day']}  "
          f"final vaccinated={summary['final_vaccinated']}")

    tracker.to_archive(paramfile_string, seed, args.output)
    if args.csv is not None:
      tracker.to_csv(f'{args.csv}_{seed}.csv')

if __name__ == '__main__':
  main()
