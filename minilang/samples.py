# Bundled MiniLang programs, keyed by name.

FIBONACCI = r'''
// compute fibonacci iteratively and print fib(10)
a = 0;
b = 1;
i = 0;
while (i < 10) {
  t = a + b;
  a = b;
  b = t;
  i = i + 1;
}
print(a);
'''

FACTORIAL = r'''
// n! for n = 1..10
n = 1;
fact = 1;
while (n <= 10) {
  fact = fact * n;
  print(fact);
  n = n + 1;
}
'''

PRIMES = r'''
// prime numbers below 50, by trial division
n = 2;
while (n < 50) {
  d = 2;
  prime = 1;
  while (d * d <= n) {
    if (n % d == 0) {
      prime = 0;
    }
    d = d + 1;
  }
  if (prime) {
    print(n);
  }
  n = n + 1;
}
'''

ARITHMETIC = r'''
// first ten terms of 3, 7, 11, ...
term = 3;
step = 4;
count = 0;
while (count < 10) {
  print(term);
  term = term + step;
  count = count + 1;
}
'''

GEOMETRIC = r'''
// first ten terms of 2, 6, 18, ...
term = 2;
ratio = 3;
count = 0;
while (count < 10) {
  print(term);
  term = term * ratio;
  count = count + 1;
}
'''

TRIANGULAR = r'''
// first ten triangular numbers
n = 1;
sum = 0;
while (n <= 10) {
  sum = sum + n;
  print(sum);
  n = n + 1;
}
'''

SAMPLES = {
    'fibonacci': FIBONACCI,
    'factorial': FACTORIAL,
    'primes': PRIMES,
    'arithmetic': ARITHMETIC,
    'geometric': GEOMETRIC,
    'triangular': TRIANGULAR,
}

DEFAULT_PROGRAM = FIBONACCI
