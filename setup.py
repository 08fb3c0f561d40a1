"""
perfsuite setup.py

perfsuiteパッケージのインストール設定
"""

from setuptools import find_packages, setup

# READMEファイルを読み込み


def read_readme():
    with open('README.md', 'r', encoding='utf-8') as f:
        return f.read()

# requirements.txtを読み込み


def read_requirements():
    with open('requirements.txt', 'r', encoding='utf-8') as f:
        return [line.strip() for line in f.readlines()
                if line.strip() and not line.startswith('#')]


setup(
    name='perfsuite',
    version='0.1.0',
    author='Pochi Team',
    author_email='pochi@example.com',
    description='Run external commands repeatedly and report trimmed average/median latency',
    long_description=read_readme(),
    long_description_content_type='text/markdown',
    url='https://github.com/pochi-team/perfsuite',
    packages=find_packages(exclude=['tests', 'tests.*']),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Software Development :: Testing',
        'Topic :: System :: Benchmark',
    ],
    keywords='benchmark, latency, command line, timing',
    python_requires='>=3.9',
    install_requires=read_requirements(),
    extras_require={
        'dev': [
            'pytest>=6.0.0,<9',
            'flake8>=3.8.0',
            'black>=21.0.0',
            'isort>=5.8.0',
            'pydocstyle>=6.0.0',
            'pre-commit>=2.12.0'
        ]
    },
    entry_points={
        'console_scripts': [
            'perfsuite=perfsuite.cli.perfsuite:main',
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
