# Copyright 2016-2024, Pulumi Corporation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""The webappstack deployment graph."""

from setuptools import find_packages, setup

VERSION = "0.1.0"


def readme():
    try:
        with open('README.md', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        return "webappstack - Development Version"


setup(name='webappstack',
      version=VERSION,
      description='Declarative resource graph for a zip-deployed Azure web app',
      long_description=readme(),
      long_description_content_type='text/markdown',
      license='Apache 2.0',
      packages=find_packages(exclude=("test*",)),
      package_data={
          'webappstack': [
              'py.typed'
          ]
      },
      python_requires='>=3.8',
      install_requires=[
          'protobuf~=4.21',
          'pyyaml~=6.0'
      ],
      extras_require={
          'test': [
              'pytest',
          ],
      },
      zip_safe=False)
