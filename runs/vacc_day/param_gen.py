import argparse
import yaml
import epigrid.initialize as I

## command line
parser = argparse.ArgumentParser(description="epigrid vaccine availability sweep")
parser.add_argument('-p', '--params', help='Params file.', required=True)
args = parser.parse_args()

def main():
    (_, model_params) = I.load_params(args.params)

    for (tv, variant) in I.param_variants(model_params, 'disease.tv', range(0, 401, 50)):
      with open(f'params_{tv}.yaml', 'w') as stream:
        yaml.dump(variant, stream)

main()
